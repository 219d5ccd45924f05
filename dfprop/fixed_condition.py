"""Normalization of hand-written fixed conditions on additional foreign keys.

A fixed condition is a SQL predicate fragment that ends up inside a string
literal of generated code, so it must become one logical line: real line
breaks are replaced by the two-character escape ``\\n``. Continuation lines
starting with ``and`` are re-indented to line up under the first clause.
"""

from dataclasses import dataclass
from typing import Optional

LINE_MARK = "\\n"
AND_MARK = "and "
INDENT_SIZE = 5


@dataclass(frozen=True)
class QueryMarks:
    """Alias and scope marks understood by the query builder."""

    alias: str = "$$alias$$"
    local_alias: str = "$$localAlias$$"
    foreign_alias: str = "$$foreignAlias$$"
    sub_query_begin: str = "$$sqbegin$$"
    sub_query_end: str = "$$sqend$$"


DEFAULT_QUERY_MARKS = QueryMarks()


def remove_scope(text: str, begin_mark: str, end_mark: str) -> str:
    """Remove every ``begin_mark ... end_mark`` span, markers included.

    An end mark that appears before the next begin mark is kept as plain text;
    an unterminated begin mark leaves the rest untouched.
    """
    parts = []
    rear = text
    while True:
        begin_index = rear.find(begin_mark)
        if begin_index < 0:
            parts.append(rear)
            break
        end_index = rear.find(end_mark)
        if end_index < 0:
            parts.append(rear)
            break
        if begin_index > end_index:
            border = end_index + len(end_mark)
            parts.append(rear[:border])
            rear = rear[border:]
            continue
        parts.append(rear[:begin_index])
        rear = rear[end_index + len(end_mark) :]
    return "".join(parts)


def remove_block_comment(text: str) -> str:
    return remove_scope(text, "/*", "*/")


class FixedConditionResolver:
    """Rewrites raw fixed conditions into their canonical form.

    Args:
        marks: Alias marks of the query builder
    """

    def __init__(self, marks: QueryMarks = DEFAULT_QUERY_MARKS):
        self.marks = marks

    def resolve(self, fixed_condition: Optional[str]) -> Optional[str]:
        """Normalize a fixed condition; absent or blank input is returned as is."""
        if fixed_condition is None or not fixed_condition.strip():
            return fixed_condition
        resolved = fixed_condition.strip()
        resolved = self.replace_alias_marks(resolved)
        resolved = self.replace_line_separators(resolved)
        return self.adjust_format(resolved)

    def replace_alias_marks(self, condition: str) -> str:
        condition = condition.replace("$$ALIAS$$", self.marks.alias)
        condition = condition.replace("$$ForeignAlias$$", self.marks.foreign_alias)
        return condition.replace("$$LocalAlias$$", self.marks.local_alias)

    @staticmethod
    def replace_line_separators(condition: str) -> str:
        return condition.replace("\r\n", "\n").replace("\n", LINE_MARK)

    def adjust_format(self, condition: str) -> str:
        """Indent ``and`` continuation lines unless the condition looks hand-formatted."""
        if LINE_MARK not in condition:
            return condition
        if self.marks.sub_query_begin in condition:
            return condition
        if self.might_be_sub_query_or_or_scope(condition):
            return condition
        adjusted = []
        for index, element in enumerate(condition.split(LINE_MARK)):
            if index > 0 and self.is_indent_fitting_target(element):
                adjusted.append(" " * INDENT_SIZE + element.lstrip())
            else:
                adjusted.append(element)
        return LINE_MARK.join(adjusted)

    @staticmethod
    def might_be_sub_query_or_or_scope(condition: str) -> bool:
        clause = remove_scope(remove_block_comment(condition), "$$over(", ")$$")
        return "(" in clause

    @staticmethod
    def is_indent_fitting_target(element: str) -> bool:
        # e.g. "and ...", "    and ...", "        and ..."
        return element.strip().startswith(AND_MARK)
