# File: winajaya/api/deps.py

import json
from collections.abc import Generator
from typing import Any, Callable, Type, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from winajaya.core.errors import MalformedBodyError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session from the
    Database object the app was built with.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    yield from request.app.state.database.get_db()


def parse_body(model: Type[ModelT]) -> Callable[[Request], Any]:
    """
    Build a dependency that reads a JSON or urlencoded body into `model`.

    Unparseable JSON raises MalformedBodyError (answered with a 500 like any
    other parse failure); field errors keep FastAPI's 422.
    """

    async def dependency(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")

        if content_type.startswith(FORM_CONTENT_TYPE):
            form = await request.form()
            data: Any = dict(form)
        else:
            raw = await request.body()
            try:
                data = json.loads(raw) if raw else {}
            except ValueError as exc:
                raise MalformedBodyError(f"Malformed JSON body: {exc}") from exc

        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False), body=data)

    return dependency
