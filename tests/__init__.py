# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the AutoInsta API:
# - test_filename_synthesizer.py: Smart filename naming and fallbacks
# - test_prompt_composer.py: Product post prompt assembly
# - test_models.py: Pydantic model validation
# - test_vision_client.py / test_n8n_client.py / test_notifier.py: HTTP clients
# - test_services.py: Service layer against a mocked Supabase client
# - test_routers.py: API endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
