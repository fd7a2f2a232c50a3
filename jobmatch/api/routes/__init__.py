"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobmatch.api.routes.init_routes import router as init_router
from jobmatch.api.routes.jobseeker_routes import router as jobseeker_router
from jobmatch.api.routes.employer_routes import router as employer_router
from jobmatch.api.routes.profile_routes import router as profile_router
from jobmatch.api.routes.skill_routes import router as skill_router
from jobmatch.api.routes.education_routes import router as education_router
from jobmatch.api.routes.certification_routes import router as certification_router
from jobmatch.api.routes.dream_career_routes import router as dream_career_router
from jobmatch.api.routes.dream_company_routes import router as dream_company_router
from jobmatch.api.routes.experience_routes import router as experience_router
from jobmatch.api.routes.resume_routes import router as resume_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(init_router)
api_router.include_router(jobseeker_router)
api_router.include_router(employer_router)
api_router.include_router(profile_router)
api_router.include_router(skill_router)
api_router.include_router(education_router)
api_router.include_router(certification_router)
api_router.include_router(dream_career_router)
api_router.include_router(dream_company_router)
api_router.include_router(experience_router)
api_router.include_router(resume_router)
