import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()  # loads .env into environment

logger = logging.getLogger(__name__)

PAGE_SIZES = (12, 24, 60, 120)


@dataclass(frozen=True)
class Defaults:
    principal: float = 5_000_000
    annual_rate: float = 8.0
    tenure_years: int = 25
    extra_emi_per_year: int = 1
    emi_hike_percent: float = 10.0
    page_size: int = 12
    log_level: str = "INFO"


def _env(name, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {name}={raw!r}, using {default}")
        return default


def load_defaults() -> Defaults:
    base = Defaults()

    page_size = _env("LOAN_TABLE_PAGE_SIZE", base.page_size, int)
    if page_size not in PAGE_SIZES:
        logger.warning(f"LOAN_TABLE_PAGE_SIZE must be one of {PAGE_SIZES}, using {base.page_size}")
        page_size = base.page_size

    return Defaults(
        principal=_env("LOAN_DEFAULT_PRINCIPAL", base.principal, float),
        annual_rate=_env("LOAN_DEFAULT_RATE", base.annual_rate, float),
        tenure_years=_env("LOAN_DEFAULT_TENURE_YEARS", base.tenure_years, int),
        extra_emi_per_year=_env("LOAN_DEFAULT_EXTRA_EMI_PER_YEAR", base.extra_emi_per_year, int),
        emi_hike_percent=_env("LOAN_DEFAULT_EMI_HIKE", base.emi_hike_percent, float),
        page_size=page_size,
        log_level=os.getenv("LOAN_LOG_LEVEL", base.log_level).upper(),
    )


def setup_logging(level="INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
