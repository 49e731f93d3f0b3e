"""Console entry point: parse, configure, run, report."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from ..domain.ports import UseCaseError
from ..utils import logging as logging_utils
from .cli import parse_invocation
from .runner import Runner
from .settings import load_settings

_log = logging.getLogger("spacectl")


def main(argv: Optional[Sequence[str]] = None, *, runner_factory=Runner) -> int:
    """Run one invocation and return the process exit code.

    Every fatal error reaches this function as a ``UseCaseError`` and is
    reported once; the exit code is then 1.
    """
    logging_utils.configure_root()
    try:
        parsed = parse_invocation(argv)
        if parsed.debug:
            logging_utils.configure_root(debug=True)
        settings = load_settings(path=parsed.config_file, overrides=parsed.overrides)
        _log.debug("Settings: %s", settings.to_dict())
        runner_factory(settings).run(parsed.invocation)
    except UseCaseError as exc:
        _report(exc)
        return 1
    except KeyboardInterrupt:
        _log.error("Interrupted")
        return 1
    return 0


def _report(exc: UseCaseError) -> None:
    _log.error("%s: %s", exc.code, exc.message)
    if exc.hint:
        _log.error("hint: %s", exc.hint)


if __name__ == "__main__":
    sys.exit(main())
