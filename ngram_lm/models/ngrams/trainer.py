import os

from tqdm import tqdm

from ngram_lm.models.configs.configs import NgramConfig
from ngram_lm.models.ngrams.model import NGram
from ngram_lm.utils.debugg_utils import Colors
from ngram_lm.utils.file_manager import (
    get_model_path,
    get_project_root,
    load_item,
    save_item,
)
from ngram_lm.utils.tokenizer import mark, tokenize
from ngram_lm.utils.tracker import track


class NGramTrainer:
    def __init__(self, config, model=None, root=None, final=False, chooser=None, enable_debug=False):
        self.config = config
        self.model = model
        self.root = root if root is not None else get_project_root()
        self.final = final
        self.chooser = chooser
        self.enable_debug = enable_debug
        self.skipped = 0
        # step name -> seconds, filled by @track
        self.step_times = {}

    @property
    def model_filename(self):
        return f"ngram_model_c{self.config.context_size}.json"

    @property
    def config_filename(self):
        return f"ngram_model_c{self.config.context_size}_config.json"

    def model_folder(self, final=None):
        final_flag = final if final is not None else self.final
        return get_model_path(self.root, "models", subdir="ngram", final=final_flag)

    def _new_model(self):
        return NGram(self.config, chooser=self.chooser, enable_debug=self.enable_debug)

    @track(label="prepare corpus")
    def prepare_corpus(self, sentences):
        """
        Tokenize and mark raw sentences.

        Sentences that are still shorter than n once marked cannot produce a single
        n-gram; they are skipped with a warning instead of aborting the run.
        """
        corpus = []
        self.skipped = 0
        for sentence in tqdm(sentences, desc="Preparing corpus"):
            tokens = mark(tokenize(sentence))
            if len(tokens) < self.config.n:
                self.skipped += 1
                continue
            corpus.append(tokens)
        if self.skipped:
            print(
                f"{Colors.WARNING}[WARN]{Colors.ENDC} Skipped {self.skipped} sentence(s) "
                f"shorter than n={self.config.n} tokens"
            )
        return corpus

    def _save_state(self, final=None):
        """
        Save the frequency table and its configuration.

        Returns:
            str: Full path of the saved table.
        """
        if self.model is None:
            raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Model not initialized")
        folder = self.model_folder(final)
        save_item(self.model.config.to_dict(), folder, self.config_filename)
        save_path = self.model.save(os.path.join(folder, self.model_filename))
        return str(save_path)

    def _load_state(self, final=None):
        """
        Rebuild an NGram from the saved table and configuration.

        Returns:
            NGram: Loaded model
        """
        folder = self.model_folder(final)
        saved = NgramConfig.from_dict(load_item(folder, self.config_filename))
        if saved.context_size != self.config.context_size:
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} Saved model uses context_size={saved.context_size}, "
                f"expected {self.config.context_size}"
            )
        # sampling settings come from the current config, the table from disk
        model = self._new_model()
        model.load(os.path.join(folder, self.model_filename))
        self.model = model
        return self.model

    @track
    def train(self, sentences, force_retrain=False, final=None):
        """Trains the model on raw sentences, or loads it when an artifact already exists."""
        model_path = os.path.join(self.model_folder(final), self.model_filename)

        if os.path.exists(model_path) and not force_retrain:
            print(f"\n--- Loading pre-trained model from:\n{model_path}")
            return self._load_state(final=final)
        print(
            f"{Colors.WARNING}[WARNING]{Colors.ENDC} No existing model found or retrain forced, training one from scratch"
        )

        print("--- Training N-gram model ---")
        corpus = self.prepare_corpus(sentences)
        self.model = self._new_model()
        self.model.train(corpus)
        print(
            f"{Colors.OKGREEN}[OK]{Colors.ENDC} {len(self.model)} contexts, "
            f"{self.model.total_ngrams} n-grams from {len(corpus)} sentences"
        )

        saved_path = self._save_state(final=final)
        print(f"{Colors.OKGREEN}[OK]{Colors.ENDC} Model saved to: {saved_path}")
        return self.model
