# DEPENDENCIES
import sys
import time
import json
import logging
import traceback
from typing import Any
from typing import Dict
from pathlib import Path
from typing import Optional
from functools import wraps
from datetime import datetime


APP_LOGGER_NAME = "lease_analyzer"


class LeaseAnalyzerLogger:
    """
    Logging for the lease analysis service

    Three named loggers are configured on setup:
    - lease_analyzer             : structured JSON events from the pipeline
    - lease_analyzer.error       : exceptions with traceback and request context
    - lease_analyzer.performance : timing records written by log_execution_time
    """
    _loggers : Dict[str, logging.Logger] = dict()
    _log_dir : Optional[Path]            = None
    _level   : int                       = logging.INFO


    @classmethod
    def setup(cls, log_dir: str = "logs", app_name: str = APP_LOGGER_NAME, level: str = "INFO"):
        """
        Configure the main, error and performance loggers

        Arguments:
        ----------
            log_dir  { str } : Directory for log files

            app_name { str } : Prefix for logger names and log file names

            level    { str } : Minimum level of the main logger (e.g. "INFO", "DEBUG")
        """
        cls._log_dir = Path(log_dir)
        cls._log_dir.mkdir(parents = True, exist_ok = True)
        cls._level   = logging.getLevelName(level.upper()) if isinstance(level, str) else level

        if not isinstance(cls._level, int):
            cls._level = logging.INFO

        cls._create_logger(name     = app_name,
                           log_file = cls._log_dir / f"{app_name}.log",
                           level    = cls._level,
                          )

        cls._create_logger(name     = f"{app_name}.error",
                           log_file = cls._log_dir / f"{app_name}_error.log",
                           level    = logging.ERROR,
                          )

        cls._create_logger(name     = f"{app_name}.performance",
                           log_file = cls._log_dir / f"{app_name}_performance.log",
                           level    = logging.INFO,
                          )


    @classmethod
    def _create_logger(cls, name: str, log_file: Path, level: int) -> logging.Logger:
        logger             = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate   = False
        logger.handlers.clear()

        formatter          = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt = '%Y-%m-%d %H:%M:%S')

        file_handler       = logging.FileHandler(log_file, encoding = "utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

        # Only warnings and above reach the console
        console_handler    = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        cls._loggers[name] = logger

        return logger


    @classmethod
    def get_logger(cls, name: str = APP_LOGGER_NAME) -> logging.Logger:
        """
        Get a configured logger, running setup lazily on first use
        """
        if not cls._loggers:
            cls.setup()

        return cls._loggers.get(name, logging.getLogger(name))


    @classmethod
    def log_structured(cls, level: int, message: str, **kwargs):
        """
        Log a message and its keyword context as one JSON line

        Arguments:
        ----------
            level   { int } : Log level

            message { str } : Event description

            **kwargs        : Structured context (jurisdiction, counts, scores ...)
        """
        logger   = cls.get_logger()

        log_data = {"timestamp" : datetime.now().isoformat(),
                    "message"   : message,
                    **kwargs
                   }

        logger.log(level, json.dumps(log_data, default = str))


    @classmethod
    def log_error(cls, error: Exception, context: Dict[str, Any] = None):
        """
        Log an exception with its traceback

        Arguments:
        ----------
            error   { Exception } : Exception object

            context { dict }      : Additional context dictionary
        """
        error_logger = cls.get_logger(f"{APP_LOGGER_NAME}.error")

        error_data   = {"timestamp"     : datetime.now().isoformat(),
                        "error_type"    : type(error).__name__,
                        "error_message" : str(error),
                        "traceback"     : traceback.format_exc(),
                        "context"       : context or {},
                       }

        error_logger.error(json.dumps(error_data, indent = 2, default = str))


    @classmethod
    def log_performance(cls, operation: str, duration: float, **metrics):
        """
        Log the duration of one operation
        """
        perf_logger = cls.get_logger(f"{APP_LOGGER_NAME}.performance")

        perf_data   = {"timestamp"        : datetime.now().isoformat(),
                       "operation"        : operation,
                       "duration_seconds" : round(duration, 4),
                       **metrics
                      }

        perf_logger.info(json.dumps(perf_data, default = str))


    @staticmethod
    def log_execution_time(operation_name: str = None):
        """
        Decorator that records execution time and logs (then re-raises) failures
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                op_name    = operation_name or func.__name__
                start_time = time.perf_counter()

                try:
                    result = func(*args, **kwargs)

                except Exception as e:
                    LeaseAnalyzerLogger.log_performance(operation = op_name,
                                                        duration  = time.perf_counter() - start_time,
                                                        status    = "error",
                                                        error     = str(e),
                                                       )

                    LeaseAnalyzerLogger.log_error(e, context = {"operation" : op_name})
                    raise

                LeaseAnalyzerLogger.log_performance(operation = op_name,
                                                    duration  = time.perf_counter() - start_time,
                                                    status    = "success",
                                                   )
                return result

            return wrapper

        return decorator



# Convenience functions
def get_logger(name: str = APP_LOGGER_NAME) -> logging.Logger:
    return LeaseAnalyzerLogger.get_logger(name)


def log_info(message: str, **kwargs):
    LeaseAnalyzerLogger.log_structured(logging.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    LeaseAnalyzerLogger.log_structured(logging.WARNING, message, **kwargs)


def log_error(error: Exception, context: Dict[str, Any] = None):
    LeaseAnalyzerLogger.log_error(error, context)


def log_debug(message: str, **kwargs):
    LeaseAnalyzerLogger.log_structured(logging.DEBUG, message, **kwargs)
