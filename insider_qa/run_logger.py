"""
Robot Framework style run log: SUITE / TEST / KEYWORD records with timings.

The pytest hooks drive suite and test records; page operations are wrapped
with `@log_keyword` so each step shows up with its elapsed time.
"""
import logging
import time
from datetime import datetime
from functools import wraps
from typing import Dict, List, Optional

RULE = "=" * 100


def format_elapsed(seconds: float) -> str:
    """HH:MM:SS.mmm"""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:06.3f}"


def _stamp(ts: Optional[float] = None) -> str:
    return datetime.fromtimestamp(ts if ts is not None else time.time()).strftime('%Y%m%d %H:%M:%S.%f')[:-3]


class RunLogger:
    def __init__(self, logger_name: str = 'insider_qa.run'):
        self.logger = logging.getLogger(logger_name)
        self.stats = {'tests': [], 'total': 0, 'passed': 0, 'failed': 0, 'skipped': 0, 'start_time': None}
        self.current_test: Optional[Dict] = None
        self.keyword_stack: List[Dict] = []

    def suite_start(self, suite_name: str, source: str = None):
        self.stats['start_time'] = time.time()
        self.logger.info(RULE)
        self.logger.info(f"SUITE {suite_name}")
        if source:
            self.logger.info(f"Source: {source}")
        self.logger.info(f"Start: {_stamp()}")
        self.logger.info(RULE)

    def suite_end(self, suite_name: str):
        end = time.time()
        start = self.stats.get('start_time') or end
        self.logger.info("")
        self.logger.info(RULE)
        self.logger.info(f"Full Name: {suite_name}")
        self.logger.info(f"Start / End / Elapsed: {_stamp(start)} / {_stamp(end)} / {format_elapsed(end - start)}")
        self.logger.info(
            f"Status: {self.stats['total']} tests total, {self.stats['passed']} passed, "
            f"{self.stats['failed']} failed, {self.stats['skipped']} skipped"
        )
        self.logger.info(RULE)
        self.log_statistics()

    def test_start(self, test_name: str, test_file: str = None):
        self.current_test = {'name': test_name, 'file': test_file, 'start_time': time.time(), 'keywords': []}
        self.stats['total'] += 1
        self.logger.info("")
        self.logger.info(RULE)
        self.logger.info(f"TEST {test_name}")
        if test_file:
            self.logger.info(f"Source: {test_file}")
        self.logger.info(f"Start: {_stamp()}")
        self.logger.info(RULE)

    def test_end(self, test_name: str, status: str, message: str = None, elapsed: float = None):
        if not self.current_test:
            return
        end = time.time()
        start = self.current_test['start_time']
        elapsed = elapsed if elapsed is not None else end - start
        status = status.upper()

        self.logger.info("")
        self.logger.info(f"Full Name: {test_name}")
        self.logger.info(f"Start / End / Elapsed: {_stamp(start)} / {_stamp(end)} / {format_elapsed(elapsed)}")
        self.logger.info(f"Status: {status}")
        if message:
            self.logger.info(f"Message: {message}")

        counter = {'PASS': 'passed', 'FAIL': 'failed', 'SKIP': 'skipped'}.get(status)
        if counter:
            self.stats[counter] += 1
        self.current_test.update(status=status, elapsed=elapsed, error=message if status == 'FAIL' else None)
        self.stats['tests'].append(self.current_test)
        self.current_test = None

    def keyword_start(self, keyword_name: str, args: List = None):
        self.keyword_stack.append({'name': keyword_name, 'args': args or [], 'start_time': time.time()})

    def keyword_end(self, status: str = 'PASS'):
        if not self.keyword_stack:
            return
        kw = self.keyword_stack.pop()
        elapsed = time.time() - kw['start_time']
        args_str = (" " + ", ".join(str(a) for a in kw['args'])) if kw['args'] else ""
        self.logger.info(f"{format_elapsed(elapsed)}KEYWORD {kw['name']}{args_str} [{status}]")
        if self.current_test is not None:
            self.current_test['keywords'].append({'name': kw['name'], 'elapsed': elapsed, 'status': status})

    def log_statistics(self):
        self.logger.info("")
        self.logger.info("Test Statistics")
        self.logger.info("-" * 100)
        self.logger.info(f"{'Test':<60} {'Status':<8} {'Elapsed':<15}")
        self.logger.info("-" * 100)
        for test in self.stats['tests']:
            self.logger.info(f"{test['name']:<60} {test.get('status', '?'):<8} {format_elapsed(test.get('elapsed', 0)):<15}")
        self.logger.info("-" * 100)

    def get_statistics(self) -> Dict:
        return dict(self.stats)


_run_logger = None


def get_run_logger() -> RunLogger:
    global _run_logger
    if _run_logger is None:
        _run_logger = RunLogger()
    return _run_logger


def log_keyword(keyword_name: str = None):
    """Record the wrapped call as a KEYWORD; the first argument (the driver) is left out of the args."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            run_logger = get_run_logger()
            run_logger.keyword_start(keyword_name or func.__name__, list(args[1:]))
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                run_logger.keyword_end('FAIL')
                run_logger.logger.error(f"{keyword_name or func.__name__} failed: {e}")
                raise
            run_logger.keyword_end('PASS')
            return result
        return wrapper
    return decorator
