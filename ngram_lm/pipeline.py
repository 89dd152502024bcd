# -------------- UTILS IMPORTS ----------------
from ngram_lm.utils.debugg_utils import Colors, print_mem_line
from ngram_lm.utils.dataloader import load_corpus, tiny_corpus
from ngram_lm.utils.file_manager import get_project_root
from ngram_lm.utils.tokenizer import add_start, detokenize, tokenize

# -------------- TRAINER / CONFIG IMPORTS ----------------
from ngram_lm.models.ngrams.trainer import NGramTrainer
from ngram_lm.models.configs.configs import NgramConfig

# -------------- OTHER IMPORTS ----------------
import argparse
import sys


class NgramPipeline:
    def __init__(self, config, project_root=None, final=False, enable_debug=False):
        self.config = config
        self.project_root = project_root or get_project_root()
        self.final = final
        self.enable_debug = enable_debug
        self.trainer = NGramTrainer(
            config,
            root=self.project_root,
            final=final,
            enable_debug=enable_debug,
        )
        self.model = None

    def load_sentences(self, corpus_path=None, train_limit=None):
        if corpus_path is None:
            print(f"{Colors.OKBLUE}[INFO]{Colors.ENDC} No corpus given, using the tiny built-in corpus")
            sentences = tiny_corpus()
            return sentences[:train_limit] if train_limit else sentences
        return load_corpus(corpus_path, limit=train_limit)

    def train(self, corpus_path=None, train_limit=None, force_retrain=False):
        sentences = self.load_sentences(corpus_path, train_limit)
        self.model = self.trainer.train(sentences, force_retrain=force_retrain)
        if self.enable_debug:
            print_mem_line(prefix=f"{Colors.OKCYAN}[DEBUG]{Colors.ENDC} after training")
        return self.model

    def generate(self, prompt="", max_new_tokens=20, corpus_path=None):
        """
        Continue `prompt` with the trained model.

        The prompt gets an SOS marker so generation can also start from scratch.
        Returns the full token list, markers included.
        """
        if self.model is None:
            self.train(corpus_path=corpus_path)
        tokens = add_start(tokenize(prompt))
        return self.model.generate(tokens, max_new_tokens)


def build_parser():
    parser = argparse.ArgumentParser(description="N-gram language model with backoff")
    parser.add_argument("--mode", choices=["train", "generate"], required=True)
    parser.add_argument("--context_size", type=int, default=2)
    parser.add_argument("--no_smoothing", action="store_true")
    parser.add_argument("--sampling_fraction", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--corpus", type=str, default=None, help="text file, one sentence per line")
    parser.add_argument("--train_limit", type=int, default=None)
    parser.add_argument("--force_retrain", action="store_true")
    parser.add_argument("--final", action="store_true")
    parser.add_argument("--root", type=str, default=None)
    parser.add_argument("--prompt", type=str, default="")
    parser.add_argument("--max_new_tokens", type=int, default=20)
    parser.add_argument("--debug", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = NgramConfig(
            context_size=args.context_size,
            smoothing=not args.no_smoothing,
            sampling_fraction=args.sampling_fraction,
            seed=args.seed,
        )
        pipeline = NgramPipeline(
            config, project_root=args.root, final=args.final, enable_debug=args.debug
        )
        if args.debug:
            config.display()
        # an explicit corpus always means a fresh table, a saved one may be reused otherwise
        force_retrain = args.force_retrain or args.mode == "train" or args.corpus is not None
        if not force_retrain:
            print(
                f"{Colors.OKBLUE}[INFO]{Colors.ENDC} Reusing the saved model if one exists "
                f"(pass --corpus or --force_retrain to train a new one)"
            )
        pipeline.train(
            corpus_path=args.corpus,
            train_limit=args.train_limit,
            force_retrain=force_retrain,
        )
        if args.mode == "generate":
            tokens = pipeline.generate(args.prompt, args.max_new_tokens)
            print("\n=== Generated Text ===")
            print(detokenize(tokens))
    except (OSError, ValueError) as e:
        print(f"{Colors.FAIL}[FAIL]{Colors.ENDC} {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
