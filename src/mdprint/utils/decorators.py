#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprint/utils/decorators.py
"""Utility decorators for the mdprint front end and renderers.

The Markdown front end and the PDF renderer import their third-party
libraries lazily. ``requires_dependencies`` turns a failed import into a
``DependencyError`` that names the distribution to install.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from mdprint.exceptions import DependencyError
from mdprint.utils.packages import check_version_requirement


def requires_dependencies(converter_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    converter_name : str
        Name of the stage needing the packages (e.g., "pdf", "markdown").
        It appears in the error message.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Distribution name for pip install (e.g., "beautifulsoup4")
        - import_name: Module name for the import statement (e.g., "bs4")
        - version_spec: Version requirement (e.g., ">=4.0.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("pdf", [("reportlab", "reportlab", ">=4.0.0")])
        ... def render(self, document, output):
        ...     from reportlab.platypus import SimpleDocTemplate
        ...     # rendering logic here

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)

                    if version_spec:
                        meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                        if not meets_requirement:
                            version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Rendering (pdf)")

    Examples
    --------
        >>> with debug_timer(logger, "Walking document"):
        ...     content = builder.transform(nodes)
        ... # Logs: "Walking document completed in 0.02s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
