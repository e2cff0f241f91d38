"""
In this module, scanning is split in two. The step function, see
_textio.scanner.step.scan, is a pure state machine: given the unread part of
the stream and whether the end of input has been reached, it decides the next
token boundary, asks for more bytes, or terminates. The IncrementalScanner
drives the step function against a source, reading chunks whenever the step
function asks for more data.

A boundary may straddle two chunks, so the step function never commits to a
decision that more bytes could change, unless the end of input is reached.
"""

from .incremental_scanner import IncrementalScanner
from .scan_kind import ScanKind
from .step import ScanStep, scan

__all__ = ["IncrementalScanner", "ScanKind", "ScanStep", "scan"]
