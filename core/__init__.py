# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the dashboard's business logic:
# - models/: Pydantic schemas for profiles, posts, schedules, assets, prompts
# - services/: Storage, profile, post, upload and schedule operations
#
# Services raise app.exceptions types; routers stay thin and delegate here.
# =============================================================================
