from pathlib import Path
from typing import Any, Dict, Optional

# ---------- Model ----------
DEFAULT_ATTENTION_LAYERS    = 4
DEFAULT_CONTEXT_SIZE        = 3     # words per context window
DEFAULT_EMBEDDING_DIMENSION = 64

# ---------- Generation ----------
DEFAULT_GENERATION_LENGTH = 15
DEFAULT_TEMPERATURE       = 0.7
DEFAULT_TOP_P             = 0.9
DEFAULT_SEED              = None    # unseeded: sampling differs run to run

# ---------- Data ----------
DATASET_DIR     = Path("dataset")
DEFAULT_DATASET = "simple-wikipedia.parquet"


def describe_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Display names and values of the settings in use; missing keys show the defaults."""
    settings = settings or {}
    return {
        "Attention layers": settings.get('attention_layers', DEFAULT_ATTENTION_LAYERS),
        "Context size": settings.get('context_size', DEFAULT_CONTEXT_SIZE),
        "Embedding dimension": settings.get('embedding_dim', DEFAULT_EMBEDDING_DIMENSION),
        "Generation length": settings.get('length', DEFAULT_GENERATION_LENGTH),
        "Temperature": settings.get('temperature', DEFAULT_TEMPERATURE),
        "Top P": settings.get('top_p', DEFAULT_TOP_P),
    }
