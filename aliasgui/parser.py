"""Parse aliases and functions out of shell config text"""

from typing import List, Optional

from aliasgui.dialects import Dialect
from aliasgui.models import AliasRecord


class AliasParser:
    """Turn raw config text into an ordered list of alias records"""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.syntax = dialect.syntax

    def parse(self, text: str) -> List[AliasRecord]:
        """Parse every recognized definition, in source order.

        Lines that match no pattern are skipped, so this never raises for
        well-typed input. A function still open at end of input is dropped.
        """
        records: List[AliasRecord] = []
        function_name: Optional[str] = None
        function_line = 0
        body: List[str] = []

        for index, line in enumerate(text.split("\n"), start=1):
            if function_name is not None:
                # Only a bare closing brace ends the body; nesting is not tracked.
                if line.strip() == "}":
                    records.append(
                        AliasRecord(
                            name=function_name,
                            command=self.syntax.to_neutral("; ".join(body)),
                            has_params=True,
                            line_number=function_line,
                        )
                    )
                    function_name = None
                    body = []
                else:
                    body.append(self.syntax.clean_body_line(line))
                continue

            if line.lstrip().startswith("#"):
                continue

            alias = self.syntax.match_alias(line)
            if alias:
                name, command = alias
                records.append(
                    AliasRecord(name=name, command=command, has_params=False, line_number=index)
                )
                continue

            function = self.syntax.match_function(line)
            if function:
                name, command = function
                records.append(
                    AliasRecord(
                        name=name,
                        command=self.syntax.to_neutral(command),
                        has_params=True,
                        line_number=index,
                    )
                )
                continue

            start = self.syntax.match_function_start(line)
            if start:
                function_name = start
                function_line = index
                body = []

        return records


def parse_aliases(text: str, dialect: Dialect) -> List[AliasRecord]:
    return AliasParser(dialect).parse(text)
