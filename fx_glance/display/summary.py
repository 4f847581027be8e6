"""Terminal rendering of a cross-rate summary."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.text import Text

from fx_glance.config import Thresholds
from fx_glance.ingestion.models import CrossRate

HEADER_STYLE = "cyan reverse"
HIGHLIGHT_STYLE = "green blink"
NORMAL_STYLE = "magenta"
TIMESTAMP_FORMAT = "%a %b %d %Y %H:%M:%S %Z"

__all__ = ["SummaryPresenter", "is_highlighted", "format_timestamp"]


def is_highlighted(value: float, threshold: float) -> bool:
    """Highlight strictly above the threshold."""

    return value > threshold


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT).strip()


class SummaryPresenter:
    """Print the header and both directions of a currency pair."""

    def __init__(
        self,
        console: Console | None = None,
        *,
        thresholds: Thresholds | None = None,
        symbols: dict[str, str] | None = None,
        color: bool = True,
    ) -> None:
        self.color = color
        self.console = console or Console(highlight=False, no_color=not color)
        self.thresholds = thresholds or Thresholds()
        self.symbols = symbols or {}

    def _style(self, style: str) -> str:
        return style if self.color else ""

    def _amount(self, code: str, value: float) -> str:
        symbol = self.symbols.get(code, "")
        prefix = f"{code} {symbol}".rstrip()
        return f"{prefix} {value:.4f}"

    def _line(self, source: str, target: str, value: float, threshold: float) -> Text:
        style = HIGHLIGHT_STYLE if is_highlighted(value, threshold) else NORMAL_STYLE
        return Text.assemble(
            f"  1 {source} buys ",
            (self._amount(target, value), self._style(style)),
        )

    def render(self, cross: CrossRate, updated_at: datetime) -> list[Text]:
        header = Text(
            f" Exchange rates from {format_timestamp(updated_at)} ",
            style=self._style(HEADER_STYLE),
        )
        return [
            header,
            self._line(cross.base, cross.quote, cross.rate, self.thresholds.base_to_quote),
            self._line(cross.quote, cross.base, cross.inverse, self.thresholds.quote_to_base),
            Text(""),
        ]

    def show(self, cross: CrossRate, updated_at: datetime) -> None:
        for line in self.render(cross, updated_at):
            self.console.print(line, soft_wrap=True)
