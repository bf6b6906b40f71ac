from mangum import Mangum

from todos.main import create_app
from todos.routers.user_router import router as user_router

app = create_app("User Lambda", [(user_router, "/users", "Users")])

handler = Mangum(app)
