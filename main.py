import shlex
import sys

from ngram_lm.pipeline import main as pipeline_main
from ngram_lm.utils.debugg_utils import Colors


def _normalize_argv(parts):
    """
    Accepts:
      generate --prompt "The quick" ...
      train --context_size 3 ...
      --mode generate ...
    Returns argv for the pipeline CLI.
    """
    if not parts:
        return []

    # Verb/inject --mode
    verb_map = {
        "generate": "generate",
        "gen": "generate",
        "g": "generate",
        "train": "train",
        "tr": "train",
        "t": "train",
    }
    if parts[0].lower() in verb_map:
        mode = verb_map[parts[0].lower()]
        return ["--mode", mode] + parts[1:]

    # Flags-only: just pass through (user must include --mode)
    return parts


def manual_mode_loop() -> int:
    print("\n[manual] Examples:")
    print('  generate --context_size 2 --prompt "The quick" --max_new_tokens 15 --sampling_fraction 0.5')
    print("  train --context_size 3 --corpus data/sentences.txt --force_retrain")
    print("  (empty line or 'q' to quit)")
    code = 0
    while True:
        try:
            line = input(f"{Colors.WARNING}Token console > {Colors.ENDC}").strip()
        except EOFError:
            break
        if not line or line.lower() in {"q", "quit", "exit"}:
            break
        code = pipeline_main(_normalize_argv(shlex.split(line)))
    return code


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        return manual_mode_loop()
    return pipeline_main(_normalize_argv(list(argv)))


if __name__ == "__main__":
    sys.exit(main())
