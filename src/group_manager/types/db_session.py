from typing import Callable, ContextManager

from sqlalchemy.orm import Session
from typing_extensions import TypeAlias

DbSession: TypeAlias = Session
DbSessionFactory = Callable[[], ContextManager[DbSession]]
