from mangum import Mangum

from todos.main import create_app
from todos.routers.todo_router import router as todo_router

app = create_app("Todo Lists Lambda", [(todo_router, "/lists", "Todo Lists")])

handler = Mangum(app)
