from jobboard.middleware.gatekeeper import EdgeGatekeeperMiddleware, GateDecision, gate_request
from jobboard.middleware.request_logging import RequestLoggingMiddleware

__all__ = [
    "EdgeGatekeeperMiddleware",
    "GateDecision",
    "gate_request",
    "RequestLoggingMiddleware",
]
