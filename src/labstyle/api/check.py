from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from labstyle.pipelines.check import check_text
from labstyle.rules_engine.catalog import RuleCatalogEntry, build_catalog
from labstyle.rules_engine.config import StyleConfig
from labstyle.rules_engine.errors import ConfigError, ParseError
from labstyle.rules_engine.models import Report


router = APIRouter(tags=["check"])


class CheckRequest(BaseModel):
    text: str
    document: Optional[str] = None
    rules: Optional[List[str]] = None
    config: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


@router.post("/check", response_model=Report)
def check_document(payload: CheckRequest) -> Report:
    try:
        return check_text(
            payload.text,
            payload.rules,
            config=StyleConfig(rules=payload.config),
            document=payload.document,
        )
    except ConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ParseError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "line": exc.line}) from exc


@router.get("/rules", response_model=List[RuleCatalogEntry])
def list_rules() -> List[RuleCatalogEntry]:
    return build_catalog()
