# Root conftest.py - MUST be at project root to load .env before test collection
# so POI_PROTOCOL_CONFIG is visible when poi.config is first used.
from dotenv import load_dotenv
load_dotenv()
