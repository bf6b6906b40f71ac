from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, false

from todos.database import Base


class TodoList(Base):
    __tablename__ = "todolists"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False, unique=True)


class Todo(Base):
    __tablename__ = "todos"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    done = Column(Boolean, nullable=False, default=False, server_default=false())
    todolist_id = Column(
        Integer,
        ForeignKey("todolists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
