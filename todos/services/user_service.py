import structlog

from todos.persistence.base import StoreBackend
from todos.services.todo_service import resolve

log = structlog.get_logger()


class UserService:
    def __init__(self, store: StoreBackend):
        self.store = store

    async def authenticate(self, username: str, password: str) -> bool:
        authenticated = await resolve(self.store.authenticate(username, password))
        if not authenticated:
            log.info("sign in rejected", username=username)
        return authenticated
