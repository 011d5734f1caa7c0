"""HTTP middleware: request timeout and request ID.

Applied in hrms.main; first added = outermost.
"""

from hrms.middleware.request_id import RequestIDMiddleware
from hrms.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
