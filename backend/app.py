from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.routers import tables_router
from backend.utils.config import get_settings
from backend.utils.logger import setup_logger

logger = setup_logger("app")
settings = get_settings()

app = FastAPI(title="Schema Order API")

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 본문 검증 실패를 400 {success: false, error} 형태로 반환합니다."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.warning("Invalid request to %s: %s", request.url.path, "; ".join(messages))
    return JSONResponse(status_code=400, content={"success": False, "error": "; ".join(messages)})


app.include_router(tables_router)


@app.get("/")
async def root():
    return {"message": "Schema Order API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
