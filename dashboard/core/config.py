import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")  # optional service role, preferred when set
SUPABASE_ASSET_BUCKET = os.getenv("SUPABASE_ASSET_BUCKET", "images")

# the one address allowed past the admin gate (not a security boundary)
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
SECRET_KEY = os.getenv("SECRET_KEY", "changeme")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

APP_NAME = os.getenv("APP_NAME", "E-Store Admin Dashboard")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PLACEHOLDER_IMAGE = os.getenv("PLACEHOLDER_IMAGE", "/placeholder.png")

# mounted screens nobody touched for this long are dropped
SCREEN_SESSION_TTL_MINUTES = int(os.getenv("SCREEN_SESSION_TTL_MINUTES", "30"))
