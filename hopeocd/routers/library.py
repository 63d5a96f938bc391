# library router: static education, meditation, sleep and crisis content
# public: no identity needed

from fastapi import APIRouter, HTTPException, Query, status

from hopeocd.services import content

router = APIRouter(prefix="/library", tags=["library"])


@router.get("/education")
async def list_education(category: str = Query("all", description="category id or 'all'")):
    if category not in {c["id"] for c in content.EDUCATION_CATEGORIES}:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category: {category}",
        )
    return {
        "categories": content.EDUCATION_CATEGORIES,
        "content": content.education_content(category),
    }


@router.get("/education/{content_id}")
async def get_education_item(content_id: str):
    item = content.find_education_content(content_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
    return item


@router.get("/meditation")
async def list_meditation():
    return {"sessions": content.MEDITATION_SESSIONS, "quickPractices": content.QUICK_PRACTICES}


@router.get("/sleep")
async def list_sleep():
    return {
        "stories": content.SLEEP_STORIES,
        "sounds": content.AMBIENT_SOUNDS,
        "breathing": content.SLEEP_BREATHING,
        "tips": content.SLEEP_TIPS,
    }


@router.get("/crisis")
async def crisis_resources():
    return {"hotlines": content.CRISIS_HOTLINES, "grounding": content.GROUNDING_EXERCISES}


@router.get("/triggers")
async def common_triggers():
    return {"triggers": content.COMMON_TRIGGERS}


@router.get("/exposures")
async def common_exposures():
    return {"exposures": content.COMMON_EXPOSURES}
