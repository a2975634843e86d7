# FastAPI application and routes
