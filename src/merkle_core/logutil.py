import logging
import re
from typing import Iterable


_HEX_DIGEST = re.compile(r"\b([0-9a-f]{12})[0-9a-f]{52}\b")


class DigestShorteningFilter(logging.Filter):
    """Cut 64-char hex digests in log records down to their first 12 chars."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        short = _HEX_DIGEST.sub(r"\1...", msg)
        if short != msg:
            record.msg = short
            record.args = None
        return True


def setup_logging(
    level: int = logging.INFO, loggers: Iterable[str] = ("merkle_core.tree", "merkle_cli")
) -> None:
    logging.basicConfig(level=level)
    f = DigestShorteningFilter()
    for name in loggers:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        if not any(isinstance(x, DigestShorteningFilter) for x in lg.filters):
            lg.addFilter(f)
