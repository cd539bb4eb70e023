import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routers import analysis_router, history_router, status_router

# --- App Setup ---
app = FastAPI(title="TNPSC Study Assistant")

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(analysis_router.router, prefix="/api", tags=["analysis"])
app.include_router(history_router.router, prefix="/api", tags=["history"])
app.include_router(status_router.router)


# --- Root endpoint ---
@app.get("/")
async def root():
    return {"message": "TNPSC Study Assistant Backend"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
