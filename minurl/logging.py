"""
Logging setup for the minurl command line.

Library modules only call get_logger(); records go through the standard
library, so nothing is printed until an application calls
configure_logging(). Output always goes to stderr because stdout carries
the normalized URLs.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

PACKAGE_LOGGER = "minurl"


def make_add_component_processor(component: str) -> Processor:
    """
    Create a processor stamping ``component`` on every event.

    Parameters
    ----------
    component : str
        Component name, e.g. "cli".

    Returns
    -------
    Processor
        structlog processor.
    """

    def add_component(
        _logger: WrappedLogger, _method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict["component"] = component
        return event_dict

    return add_component


def configure_logging(
    json_logs: bool = False,
    log_level: str = "WARNING",
    component: str | None = None,
) -> None:
    """
    Route minurl logs to stderr as JSON lines or console text.

    Parameters
    ----------
    json_logs : bool
        Render JSON instead of key=value console lines.
    log_level : str
        Level for the ``minurl`` logger hierarchy; other loggers stay at WARNING.
    component : str | None
        Optional component name added to each event.
    """
    pre_chain: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if component:
        pre_chain.append(make_add_component_processor(component))

    # URL objects and compiled patterns are logged by repr
    renderer: Processor = (
        structlog.processors.JSONRenderer(default=repr)
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(log_level.upper())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger wrapping the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
