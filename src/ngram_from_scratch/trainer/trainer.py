import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from ngram_from_scratch.config import (
    DEFAULT_ATTENTION_LAYERS,
    DEFAULT_CONTEXT_SIZE,
    DEFAULT_EMBEDDING_DIMENSION,
    DEFAULT_SEED,
)
from ngram_from_scratch.language_model.language_model import LanguageModel, train_language_model

PACKAGE_LOGGER = "ngram_from_scratch"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class ModelTrainer:
    """
    Trainer for the word-level n-gram language model.

    Config keys (all optional):
        context_size, embedding_dim, attention_layers, seed
    """
    def __init__(self,
                 config: Optional[Dict[str, Any]] = None,
                 log_dir: Optional[Path] = None):

        self.config = config or {}
        self.context_size = self.config.get('context_size', DEFAULT_CONTEXT_SIZE)
        self.embedding_dim = self.config.get('embedding_dim', DEFAULT_EMBEDDING_DIMENSION)
        self.attention_layers = self.config.get('attention_layers', DEFAULT_ATTENTION_LAYERS)
        self.seed = self.config.get('seed', DEFAULT_SEED)

        if self.context_size < 1:
            raise ValueError(f"context_size must be >= 1, got {self.context_size}")

        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(exist_ok=True, parents=True)

        self.file_handler: Optional[logging.FileHandler] = None
        self.setup_logging()

        self.logger.info(
            f"Initialized trainer: context_size={self.context_size}, "
            f"embedding_dim={self.embedding_dim}, attention_layers={self.attention_layers}"
        )

    def setup_logging(self):
        """Setup logging system"""
        logging.basicConfig(
            level=logging.INFO,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler()]
        )

        # attached to the package logger so the file is written even when
        # the root logger was configured elsewhere
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        package_logger.setLevel(logging.INFO)
        if self.log_dir is not None:
            self.file_handler = logging.FileHandler(self.log_dir / 'training.log')
            self.file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            package_logger.addHandler(self.file_handler)

        self.logger = logging.getLogger(__name__)

    def close(self):
        """Detach and close the training.log handler, if any."""
        if self.file_handler is None:
            return
        logging.getLogger(PACKAGE_LOGGER).removeHandler(self.file_handler)
        self.file_handler.close()
        self.file_handler = None

    def train(self, texts: Iterable[str]) -> Tuple[LanguageModel, Dict[str, Any]]:
        """Train a language model and report basic statistics."""
        start_time = time.time()

        self.logger.info(f"Training {self.context_size}-word context n-gram language model...")
        model = train_language_model(
            texts,
            self.context_size,
            embedding_dimension=self.embedding_dim,
            attention_layer_count=self.attention_layers,
            seed=self.seed,
        )

        training_time = time.time() - start_time
        metrics = {
            "training_time": training_time,
            "contexts": len(model.ngram_model),
            "vocab_size": len(model.vocabulary),
        }
        self.logger.info(f"Model trained in {training_time:.1f}s")

        return model, metrics
