import os
from dotenv import load_dotenv

load_dotenv()

# ───── Model gateway ─────
HF_TOKEN = os.getenv("HF_TOKEN", "")
MODEL_NAME = os.getenv("MODEL_NAME", "meta-llama/Llama-3.1-8B-Instruct")
GATEWAY_TIMEOUT = float(os.getenv("GATEWAY_TIMEOUT", "60"))
MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))

# Characters of the document sent with each model call
MATCH_TEXT_BUDGET = 15000
AI_TEXT_BUDGET = 6000

# ───── Submission limits ─────
MAX_TEXT_LENGTH = 50000
MIN_SEGMENT_LENGTH = 5

RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "10"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))

# ───── Report ─────
REPORT_AUTHOR = os.getenv("REPORT_AUTHOR", "Verified User")
AI_RISK_THRESHOLD = 70
RECENT_REPORTS = 5

# ───── File support ─────
ALLOWED_EXTENSIONS = {"txt", "pdf", "docx"}
MAX_FILE_SIZE_MB = 5

# ───── Server ─────
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")
