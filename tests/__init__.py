# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CollegeConnect API:
# - test_middleware.py: CORS, access log, body decoding and the terminal error stage
# - test_static_assets.py: fall-through static file serving
# - test_routing.py: route table order and conflict detection
# - test_status.py: root, /api/test and /health
# - test_errors.py: error envelopes and the terminal handler
# - test_database.py: connector lifecycle and connection state
# - test_realtime.py: room registry and the Socket.IO channel
# - test_routers.py: route group handlers against a fake database
# - test_config.py: settings parsing
#
# Run tests with: pytest
# =============================================================================
