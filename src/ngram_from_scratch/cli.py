#!/usr/bin/env python3
"""Train an n-gram language model on a dataset and generate text from prompts."""
import argparse
import logging
import random
import sys

from ngram_from_scratch.config import (
    DATASET_DIR,
    DEFAULT_ATTENTION_LAYERS,
    DEFAULT_CONTEXT_SIZE,
    DEFAULT_EMBEDDING_DIMENSION,
    DEFAULT_GENERATION_LENGTH,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_P,
    describe_settings,
)
from ngram_from_scratch.dataset.dataset import load_training_texts, select_dataset_file
from ngram_from_scratch.language_model.language_model import generate_text
from ngram_from_scratch.tokenizer.tokenizer import split_words
from ngram_from_scratch.trainer.trainer import ModelTrainer

logger = logging.getLogger("ngram_from_scratch")


def build_parser():
    parser = argparse.ArgumentParser(description='Generate text using a word-level n-gram model')
    parser.add_argument('--dataset', type=str, default=None,
                        help='Dataset file (.parquet, .csv or .txt); default: pick from --dataset-dir')
    parser.add_argument('--dataset-name', type=str, default=None,
                        help='Name of a .parquet file inside --dataset-dir; unknown names fall back to the default')
    parser.add_argument('--dataset-dir', type=str, default=str(DATASET_DIR),
                        help='Directory searched for .parquet datasets')
    parser.add_argument('--context-size', type=int, default=DEFAULT_CONTEXT_SIZE,
                        help='Number of preceding words used as context')
    parser.add_argument('--embedding-dim', type=int, default=DEFAULT_EMBEDDING_DIMENSION,
                        help='Embedding dimension for the attention illustration')
    parser.add_argument('--attention-layers', type=int, default=DEFAULT_ATTENTION_LAYERS,
                        help='Residual attention layers run per generation step')
    parser.add_argument('--length', type=int, default=DEFAULT_GENERATION_LENGTH,
                        help='Maximum words to generate')
    parser.add_argument('--temperature', type=float, default=DEFAULT_TEMPERATURE,
                        help='Sampling temperature (> 0)')
    parser.add_argument('--top-p', type=float, default=DEFAULT_TOP_P,
                        help='Nucleus threshold; values outside (0, 1) disable it')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for embeddings and sampling')
    parser.add_argument('--prompt', type=str, default=None,
                        help='Generate once for this prompt instead of starting the interactive loop')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Also write training.log into this directory')
    return parser


def respond(model, prompt, args, rng):
    """Generate a continuation for one prompt; returns None if the prompt is rejected."""
    if len(split_words(prompt)) < model.context_window_size:
        print(f"Please enter at least {model.context_window_size} words.")
        return None
    try:
        output = generate_text(model, prompt, args.length, args.temperature, args.top_p, rng)
    except ValueError as e:
        logger.error(str(e))
        return None
    print(output)
    return output


def interactive_loop(model, args, rng):
    print(f"This is a {model.context_window_size}-word context model, "
          f"so enter at least {model.context_window_size} words.")
    print('Type "exit" or press Ctrl-D to quit.\n')
    while True:
        try:
            user_input = input("Prompt> ")
        except EOFError:
            break
        if user_input.strip().lower() == "exit":
            break
        if user_input.strip() == "":
            continue
        respond(model, user_input, args, rng)


def run(trainer, args):
    settings = {
        **trainer.config,
        'length': args.length,
        'temperature': args.temperature,
        'top_p': args.top_p,
    }
    for name, value in describe_settings(settings).items():
        logger.info(f"{name}: {value}")

    try:
        if args.dataset is not None:
            dataset_path = args.dataset
        else:
            dataset_path = select_dataset_file(args.dataset_dir, args.dataset_name)
        texts = load_training_texts(dataset_path)
        model, _ = trainer.train(texts)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    rng = random.Random(args.seed)

    if args.prompt is not None:
        return 0 if respond(model, args.prompt, args, rng) is not None else 1

    interactive_loop(model, args, rng)
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        trainer = ModelTrainer(
            config={
                'context_size': args.context_size,
                'embedding_dim': args.embedding_dim,
                'attention_layers': args.attention_layers,
                'seed': args.seed,
            },
            log_dir=args.log_dir,
        )
    except ValueError as e:
        logger.error(str(e))
        return 1

    try:
        return run(trainer, args)
    finally:
        trainer.close()


if __name__ == "__main__":
    sys.exit(main())
