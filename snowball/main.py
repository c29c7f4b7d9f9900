from fastapi import FastAPI

from snowball.config import get_settings
from snowball.logging_config import setup_logging
from snowball.routers import calculations, debts

settings = get_settings()
setup_logging(settings)

app = FastAPI(title=settings.APP_NAME)

app.include_router(debts.router, prefix="/debts", tags=["debts"])
app.include_router(calculations.router, prefix="/calculations", tags=["calculations"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
