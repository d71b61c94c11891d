from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from app.api.routes import auth, department, employee
from app.core.config import get_settings
from app.core.cors import get_cors_middleware_config, get_cors_config
from app.core.exceptions import AppError
from app.core.logging_config import init_logging
from app.core.security.jwt import get_token_issuer
from app.core.security.mfa.router import router as mfa_router
from app.db.database import init_db

# ロガーの設定
logger = logging.getLogger(__name__)

settings = get_settings()
init_logging(settings)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 署名鍵はここで一度だけ読み込む
    get_token_issuer()
    init_db()
    logger.info(f"環境: {settings.environment}")
    logger.info(f"CORS設定: {get_cors_config()}")
    yield
    logger.info("Shutting down")

app = FastAPI(title="Employee Management API", version="1.0.0", lifespan=lifespan)

# 環境別CORS設定
app.add_middleware(CORSMiddleware, **get_cors_middleware_config())

""" ----------
 例外ハンドラ登録
---------- """
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    # 構造化ペイロード（MFAチャレンジ）があればそのまま返す
    content = exc.payload if exc.payload is not None else {"detail": exc.message}
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # 入力不正は422ではなく400で返す（項目名: メッセージ をまとめる）
    errors = []
    for error in exc.errors():
        loc = " -> ".join(str(part) for part in error["loc"] if part != "body")
        errors.append(f"{loc}: {error['msg']}")
    logger.info(f"入力検証エラー: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(errors) or "Bad request"},
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"予期しないエラー: {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )

""" ----------
 ルーター登録
---------- """
# 認証関連API（登録・ログイン・パスワードリセット・プロフィール画像）
app.include_router(auth.router)

# MFA関連API
app.include_router(mfa_router)

# 部署関連API
app.include_router(department.router, prefix="/api")

# 社員関連API（ログ閲覧を含む）
app.include_router(employee.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Employee Management API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
