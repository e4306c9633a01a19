"""
tlhmorph: Klingon Morphological Analyzer and Word Completer

Splits a Klingon word into dictionary morphemes and, when the word is not
finished yet, suggests dictionary entries that would continue it.
Uses the zrajm Klingon dictionary.

Basic Usage:
    import tlhmorph

    result = tlhmorph.complete("QaghwI")
    for parse in result.parsed:
        print(" | ".join(sorted(m)[0].tlh for m in parse))
    for entry in result.suggestions:
        print(entry.tlh, entry.pos.value)
"""

import threading
import time
import unicodedata
from contextlib import contextmanager
from typing import Optional, Tuple

from tlhmorph.completion import Completions, completions
from tlhmorph.dictionary import DictEntry, Dictionary, PartOfSpeech

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def complete(text: str, dictionary: Optional[Dictionary] = None) -> Completions:
    """
    Parse and complete a Klingon word.

    This is the main entry point.

    Args:
        text: Klingon word, possibly incomplete (must be non-empty)
        dictionary: Dictionary to use. Loads the default one if not given.

    Returns:
        Completions with the parses of the word and the suggestions

    Raises:
        ValueError: If text is empty or whitespace-only
        FileNotFoundError: If no dictionary is given and the default
            dictionary file is missing

    Example:
        >>> result = tlhmorph.complete("QaghwIj")
        >>> [[sorted(m)[0].tlh for m in p] for p in result.parsed]
        [['Qagh', '-wIj']]
    """
    if not text or not text.strip():
        raise ValueError("text must be non-empty and not whitespace-only")

    text = unicodedata.normalize('NFC', text.strip())

    if dictionary is None:
        from tlhmorph.dictionary import load_dictionary
        dictionary = load_dictionary()

    return completions(dictionary, text)


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Pre-load the dictionary.

    Args:
        verbose: If True, print timing information

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    from tlhmorph.dictionary import load_dictionary, get_dictionary_size

    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading tlhmorph dictionary...")

    t0 = time.perf_counter()
    load_dictionary()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000

    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms ({get_dictionary_size():,} entries)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    return total_time, timings


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Async API
# =============================================================================

# Thread pool for async operations
_executor = None
_executor_lock = threading.Lock()


def _get_executor():
    """Get or create the thread pool executor."""
    global _executor
    from concurrent.futures import ThreadPoolExecutor

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="tlhmorph")

    return _executor


class CompletionTimeoutError(Exception):
    """Raised when async completion times out."""
    pass


async def complete_async(
    text: str,
    dictionary: Optional[Dictionary] = None,
    timeout: float = 30.0,
) -> Completions:
    """
    Parse and complete a Klingon word asynchronously.

    Args:
        text: Klingon word, possibly incomplete
        dictionary: Dictionary to use. Loads the default one if not given.
        timeout: Maximum time in seconds (default 30s)

    Returns:
        Completions

    Raises:
        CompletionTimeoutError: If completion exceeds timeout
        ValueError: If text is empty

    Example:
        >>> import asyncio
        >>> result = asyncio.run(tlhmorph.complete_async("Qa"))
    """
    import asyncio

    loop = asyncio.get_running_loop()
    executor = _get_executor()

    try:
        future = loop.run_in_executor(executor, complete, text, dictionary)
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise CompletionTimeoutError(f"Completion timed out after {timeout}s")


def shutdown():
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=True)
            _executor = None


# =============================================================================
# Session Context (for batch processing)
# =============================================================================

@contextmanager
def session_context(path=None):
    """
    Context manager for batch completion.

    Loads the dictionary on entry and unloads it on exit.

    Example:
        >>> with tlhmorph.session_context():
        ...     for word in words:
        ...         result = tlhmorph.complete(word)
    """
    from tlhmorph.dictionary import load_dictionary, unload_dictionary
    load_dictionary(path)

    try:
        yield
    finally:
        unload_dictionary()


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Completions",
    "DictEntry",
    "Dictionary",
    "PartOfSpeech",
    # Sync API
    "complete",
    "completions",
    "warm_up",
    "get_version",
    # Async API
    "complete_async",
    "shutdown",
    # Batch processing
    "session_context",
    # Exceptions
    "CompletionTimeoutError",
    # Version
    "__version__",
]
