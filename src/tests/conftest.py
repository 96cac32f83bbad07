import textwrap

import pytest


CONFORMANT_LAB = textwrap.dedent(
    """\
    ---
    title: "Lab 3: Extreme Value Analysis"
    format: html
    ---

    # Fitting a GEV distribution

    This lab fits a generalized extreme value distribution to annual maxima.
    We use `gevfit()` from the course helper package.

    ## Loading the data

    The annual maxima live in `annual_max.csv`.

    - Read the file with `read.csv()`.
    - Inspect the first rows.

    ```{r}
    library(extRemes)
    maxima <- read.csv("annual_max.csv") # <1>
    fit <- fevd(maxima$flow, type = "GEV") # <2>
    ```

    1. Read the annual maximum series.
    2. Fit the GEV by maximum likelihood.

    ### Checking the fit

    Compare the fitted and empirical return levels.
    """
)


@pytest.fixture
def conformant_lab() -> str:
    return CONFORMANT_LAB


@pytest.fixture
def make_doc():
    def _make(text: str) -> str:
        return textwrap.dedent(text)

    return _make
