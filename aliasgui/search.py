"""Filter alias records by a search query"""

from typing import List

from rapidfuzz import fuzz

from aliasgui.models import AliasRecord

DEFAULT_FUZZY_THRESHOLD = 60


def filter_records(
    records: List[AliasRecord],
    query: str,
    fuzzy: bool = False,
    threshold: int = DEFAULT_FUZZY_THRESHOLD,
) -> List[AliasRecord]:
    """Keep records whose name or command matches the query.

    Plain mode is a case-insensitive substring match. Fuzzy mode scores name
    and command with rapidfuzz's partial_ratio and keeps the best matches
    first.
    """
    query = query.strip().lower()
    if not query:
        return list(records)

    if not fuzzy:
        return [
            r for r in records
            if query in r.name.lower() or query in r.command.lower()
        ]

    scored = []
    for record in records:
        score = max(
            fuzz.partial_ratio(query, record.name.lower()),
            fuzz.partial_ratio(query, record.command.lower()),
        )
        if score >= threshold:
            scored.append((score, record))
    scored.sort(key=lambda item: item[0], reverse=True)
    return [record for _, record in scored]
