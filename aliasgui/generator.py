"""Render alias records back into shell config text"""

from typing import Iterable

from aliasgui.dialects import Dialect
from aliasgui.models import AliasRecord


def generate_config(records: Iterable[AliasRecord], dialect: Dialect) -> str:
    """Render one line per record, keeping order.

    Names and commands are not validated here; callers validate at the
    request boundary.
    """
    syntax = dialect.syntax
    return "\n".join(syntax.render(record) for record in records)
