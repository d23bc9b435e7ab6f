"""Business-rule failures raised by the services.

Each carries the HTTP status the API answers with; ``main`` installs a single
handler that turns any ``PortalError`` into ``{"detail": ...}``.
"""


class PortalError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(PortalError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientPoints(PortalError):
    status_code = 400

    def __init__(self, balance: int, cost: int):
        super().__init__("Insufficient points")
        self.balance = balance
        self.cost = cost


class AlreadyProcessed(PortalError):
    status_code = 409

    def __init__(self, request_id: str, status: str):
        super().__init__(f"Request already {status}")
        self.request_id = request_id
        self.status = status


class InvalidInput(PortalError):
    status_code = 400
