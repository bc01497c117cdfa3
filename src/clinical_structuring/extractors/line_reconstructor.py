# src/clinical_structuring/extractors/line_reconstructor.py
"""
Spatial line reconstruction.

Groups the unordered text tokens of one page into reading-order lines:
top to bottom by baseline, left to right within a line.
"""

from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple
import logging

from ..config import StructuringSettings, structuring_settings
from ..core.document import Line, TextToken


class TokenLineReconstructor:
    """
    Reading-order line grouping by vertical position.

    Tokens are sorted by descending y, with near-ties (|dy| < tolerance)
    ordered by ascending x. A new line starts whenever a token's y is at
    least `tolerance` away from the first token of the current line; the
    anchor does not move as tokens are added, so long lines cannot drift.
    """

    def __init__(self, settings: Optional[StructuringSettings] = None):
        self.settings = settings or structuring_settings
        self.logger = logging.getLogger(__name__)

    @property
    def tolerance(self) -> float:
        return self.settings.LINE_Y_TOLERANCE

    def group_lines(self, tokens: Iterable[TextToken]) -> Tuple[Line, ...]:
        """
        Group tokens into lines.

        Every input token appears in exactly one output line. An empty
        token list yields no lines.
        """
        ordered = self.sort_tokens(tokens)
        if not ordered:
            return ()

        lines: List[Line] = []
        current = [ordered[0]]
        anchor_y = ordered[0].y

        for token in ordered[1:]:
            if abs(token.y - anchor_y) < self.tolerance:
                current.append(token)
            else:
                lines.append(self._finish_line(current))
                current = [token]
                anchor_y = token.y

        lines.append(self._finish_line(current))

        self.logger.debug(f"Grouped {len(ordered)} tokens into {len(lines)} lines")
        return tuple(lines)

    def sort_tokens(self, tokens: Iterable[TextToken]) -> List[TextToken]:
        """Sort tokens into reading order (composite y/x key)."""
        return sorted(tokens, key=cmp_to_key(self._compare))

    def _compare(self, a: TextToken, b: TextToken) -> float:
        if abs(b.y - a.y) < self.tolerance:
            return a.x - b.x
        return b.y - a.y

    @staticmethod
    def _finish_line(tokens: List[TextToken]) -> Line:
        # Near-tie chains can leave a band out of x order; sorted() is stable
        return tuple(sorted(tokens, key=lambda token: token.x))


def group_text_into_lines(
    tokens: Iterable[TextToken],
    settings: Optional[StructuringSettings] = None
) -> Tuple[Line, ...]:
    """Convenience wrapper around TokenLineReconstructor.group_lines()."""
    return TokenLineReconstructor(settings).group_lines(tokens)
