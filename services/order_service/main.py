from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .exceptions import ErrorDetail, InputValidationError, OrderWorkflowError
from .router import router, public_router
from .models import Order, OrderItem # Import to register with Base

async def order_workflow_error_handler(request: Request, exc: OrderWorkflowError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())

async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Bodies that are not a JSON object get the same 400 envelope as bad fields."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"] if part != "body"]
        field = ".".join(loc) or None
        errors.append(ErrorDetail(field=field, code="invalid_type", message=f"{field or 'body'}: {err['msg']}"))

    return JSONResponse(status_code=400, content=InputValidationError(errors).to_response())

def include_order_service(app: FastAPI, prefix: str = "/api/orders"):
    """
    Serves the order routes directly on `app` under `prefix`.

    Orders are included rather than mounted so that `POST /api/orders`
    answers itself instead of redirecting to the trailing-slash path.
    The error handlers therefore live on `app` too.
    """
    app.include_router(public_router, prefix=prefix)
    app.include_router(router, prefix=prefix)
    app.add_exception_handler(OrderWorkflowError, order_workflow_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
