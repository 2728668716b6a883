import math

import pandas as pd

SEARCH_COLUMNS = ("Month", "EMI", "Principal Paid")


def search_rows(df: pd.DataFrame, term: str) -> pd.DataFrame:
    """
    Keep rows whose month, EMI or principal portion contains the search text.
    """
    term = (term or "").strip()
    if not term:
        return df

    mask = pd.Series(False, index=df.index)
    for column in SEARCH_COLUMNS:
        mask |= df[column].astype(str).str.contains(term, regex=False)
    return df[mask]


def page_count(df: pd.DataFrame, page_size: int) -> int:
    return max(math.ceil(len(df) / page_size), 1)


def paginate(df: pd.DataFrame, page: int, page_size: int) -> pd.DataFrame:
    page = min(max(page, 1), page_count(df, page_size))
    start = (page - 1) * page_size
    return df.iloc[start:start + page_size]
