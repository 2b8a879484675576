"""
Configuration settings for the block chunker
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Chunking Settings (content units are characters)
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "1000"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "200"))
MAX_TOKENS_PER_CHUNK = int(os.getenv("MAX_TOKENS_PER_CHUNK", "8000"))  # Informational, not enforced

# Parallel block chunking (1 = sequential)
CHUNK_WORKERS = int(os.getenv("CHUNK_WORKERS", "1"))

# Prepend [STRUCTURE: ...] annotations before segmenting
ANNOTATE_STRUCTURE = os.getenv("ANNOTATE_STRUCTURE", "false").lower() == "true"

# Logging Settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
# Empty = console only
LOG_FILE = os.getenv("LOG_FILE", "")
