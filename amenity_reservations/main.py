from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator, Awaitable, Callable
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, Request, Response

from .config import Settings, get_settings
from .database import async_session, create_tables
from .infrastructure.repositories import SqlAlchemyKeyValueStore
from .routers import admin, reservations, spaces
from .schemas import PaymentInfo
from .usecases.state import load_state
from .utils.request_id import REQUEST_ID_HEADER, generate_request_id, set_request_id
from .utils.time import today_in


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    await create_tables()
    kv = SqlAlchemyKeyValueStore(async_session)
    clock = partial(today_in, ZoneInfo(settings.local_timezone))
    app.state.reservations = await load_state(kv, clock=clock)
    yield


async def request_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
    set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        set_request_id(None)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app = FastAPI(title="Amenity Reservations API", lifespan=lifespan)
app.middleware("http")(request_id_middleware)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/payment-info", response_model=PaymentInfo)
async def payment_info(settings: Settings = Depends(get_settings)) -> PaymentInfo:
    return PaymentInfo(
        pix_key=settings.pix_key_formatted,
        pix_key_raw=settings.pix_key_raw,
        company_name=settings.pix_company_name,
        note="A reserva será confirmada após o envio do comprovante para o síndico.",
    )


app.include_router(spaces.router)
app.include_router(reservations.router)
app.include_router(admin.router)
