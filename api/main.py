from fastapi import FastAPI

from api.routes import router

app = FastAPI(
    title="Typed Query Results API",
    version="0.1.0",
    description="Tutorial account queries decoded into typed records",
)
app.include_router(router)
