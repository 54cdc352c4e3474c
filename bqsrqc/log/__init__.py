"""Utility functionality for logging.
"""
import os
import sys

import logbook

from bqsrqc import utils

LOG_NAME = "bqsr-qc"
DEFAULT_LOG_DIR = "log"

def get_log_dir(config):
    d = config.get("log_dir", DEFAULT_LOG_DIR)
    return d

logger = logbook.Logger(LOG_NAME)
logger_cl = logbook.Logger(LOG_NAME + "-commands")
logger_stdout = logbook.Logger(LOG_NAME + "-stdout")

def _is_cl(record, _):
    return record.channel == LOG_NAME + "-commands"

def _is_stdout(record, _):
    return record.channel == LOG_NAME + "-stdout"

def _not_cl(record, handler):
    return not _is_cl(record, handler) and not _is_stdout(record, handler)

class CloseableNestedSetup(logbook.NestedSetup):
    def close(self):
        for obj in self.objects:
            if hasattr(obj, "close"):
                obj.close()

def _create_log_handler(config):
    logbook.set_datetime_format("utc")
    handlers = [logbook.NullHandler()]
    format_str = "".join(["[{record.time:%Y-%m-%dT%H:%MZ}] " if config.get("include_time", True) else "",
                          "{record.message}"])

    log_dir = get_log_dir(config)
    if log_dir:
        utils.safe_makedir(log_dir)
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "%s.log" % LOG_NAME),
                                            format_string=format_str, level="INFO",
                                            filter=_not_cl))
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "%s-debug.log" % LOG_NAME),
                                            format_string=format_str, level="DEBUG", bubble=True,
                                            filter=_not_cl))
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "%s-commands.log" % LOG_NAME),
                                            format_string=format_str, level="DEBUG",
                                            filter=_is_cl))
    handlers.append(logbook.StreamHandler(sys.stdout, format_string="{record.message}",
                                          level="DEBUG", filter=_is_stdout))
    handlers.append(logbook.StreamHandler(sys.stderr, format_string=format_str, bubble=True,
                                          level=config.get("log_level", "INFO"),
                                          filter=_not_cl))
    return CloseableNestedSetup(handlers)

def setup_local_logging(config=None):
    """Setup logging for a local run, directing messages to log files and stderr.

    The returned handler is bound to the application; callers release it
    with `pop_application` and `close` when the run finishes.
    """
    if config is None: config = {}
    handler = _create_log_handler(config)
    handler.push_application()
    return handler

def close_local_logging(handler):
    handler.pop_application()
    handler.close()
