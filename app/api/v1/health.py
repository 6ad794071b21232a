from fastapi import APIRouter

from app.scoring import load_default_profile

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    profile = load_default_profile()
    return {"status": "healthy", "scoring_categories": list(profile.weights)}
