import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from devconnector.routes import auth, posts, profile, users
from devconnector.config import settings  # <- import settings
from devconnector.core.errors import register_exception_handlers
import devconnector.models  # <- ensure all model modules are imported and mappers registered

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(title=settings.APP_NAME)

# Use configured origins (reads from devconnector.config.settings)
origins = settings.ALLOWED_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 400 for bad bodies, opaque 500 for database failures
register_exception_handlers(app)

app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
app.include_router(posts.router, prefix="/api/posts", tags=["posts"])


@app.get("/")
async def read_root():
    return {"message": "API Running"}


def run():
    uvicorn.run("devconnector.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
