import logging
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn
from api.crud.errors import AppError
from api.routers.system import routes as SystemRoutes
from api.routers.users import routes as UserRoutes
from api.routers.campaigns import routes as CampaignRoutes
from api.routers.orders import routes as OrderRoutes
from api.routers.payouts import routes as PayoutRoutes
from api.security import require_admin, require_service_key
from config import ENV


def _error_body(code: str, message: str, details=None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logging.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        details.setdefault(field, []).append(err.get("msg", "invalid"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", details),
    )


class FastAPIManager:
    def __init__(self):
        self.env = ENV()
        # формат версии: версия.подверсия:месяц.год.число:stable (beta, stable)
        self.api = FastAPI(
            version="1.0:10.26.19:beta",
            title="Campaign commissions API",
            description=(
                "Маркетинговые кампании, заказы и комиссии продавцов. "
                "Ставка комиссии фиксируется в заказе при создании и больше не меняется; "
                "месячные выплаты считаются по сохранённым суммам активных заказов."
            ),
        )
        self.add_exception_handlers()
        self.add_routers()

    def add_exception_handlers(self):
        self.api.add_exception_handler(AppError, app_error_handler)
        self.api.add_exception_handler(RequestValidationError, request_validation_handler)

    def add_routers(self):
        self.api.include_router(
            SystemRoutes.router
        )
        self.api.include_router(
            UserRoutes.router,
            prefix="/users",
            dependencies=[Depends(require_service_key), Depends(require_admin)],
            tags=["Пользователи"]
        )
        self.api.include_router(
            CampaignRoutes.router,
            prefix="/campaigns",
            dependencies=[Depends(require_service_key)],
            tags=["Кампании"]
        )
        self.api.include_router(
            OrderRoutes.router,
            prefix="/orders",
            dependencies=[Depends(require_service_key)],
            tags=["Заказы"]
        )
        self.api.include_router(
            PayoutRoutes.router,
            prefix="/payouts",
            dependencies=[Depends(require_service_key)],
            tags=["Выплаты"]
        )

    def start_server(self):
        uvicorn.run(self.api, host=self.env.HOST, port=self.env.PORT)

    def get_app(self) -> FastAPI:
        return self.api
