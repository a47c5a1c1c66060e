# =============================================================================
# collegeconnect/ - CollegeConnect Backend
# =============================================================================
# This package contains the web application:
# - main.py: app factory, lifespan, entry point
# - config.py: environment variable loading and settings
# - database.py: MongoDB connector and connection state
# - middleware/: CORS, access log, body decoding, static files
# - routing.py: the ordered route table
# - routers/: API endpoint definitions organized by feature
# - realtime/: Socket.IO presence rooms
# =============================================================================

__version__ = "1.0.0"
