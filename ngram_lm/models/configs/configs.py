from ngram_lm.utils.debugg_utils import Colors


class BaseConfig:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    def to_dict(self):
        return dict(self.__dict__)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} {cls.__name__} expects a mapping, got {type(data).__name__}"
            )
        try:
            return cls(**data)
        except TypeError as e:
            raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Invalid {cls.__name__} fields: {e}") from e


class NgramConfig(BaseConfig):
    """
    Configuration for the n-gram model.

    Args:
        context_size (int): number of preceding tokens used to predict the next one (n - 1).
        smoothing (bool): back off to shorter contexts when the full one was never seen.
        sampling_fraction (float): share of the top ranked continuations eligible for sampling, in (0, 1].
        seed (int, optional): seed for the default random chooser.
    """

    def __init__(self, context_size, smoothing=True, sampling_fraction=1.0, seed=None):
        super().__init__()
        if isinstance(context_size, bool) or not isinstance(context_size, int) or context_size < 1:
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} context_size must be an integer >= 1, got {context_size!r}"
            )
        if not isinstance(smoothing, bool):
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} smoothing must be a boolean, got {smoothing!r}"
            )
        if not 0.0 < float(sampling_fraction) <= 1.0:
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} sampling_fraction must be in (0, 1], got {sampling_fraction!r}"
            )

        self.context_size = context_size
        self.smoothing = smoothing
        self.sampling_fraction = float(sampling_fraction)
        self.seed = seed

    @property
    def n(self):
        return self.context_size + 1

    @classmethod
    def with_defaults(
        cls,
        *,
        context_size: int = 2,
        smoothing: bool = True,
        sampling_fraction: float = 1.0,
        seed: int | None = None,
    ) -> "NgramConfig":
        """
        Supplies defaults. Use this in trainers instead of calling __init__ directly.
        """
        return cls(
            context_size=context_size,
            smoothing=smoothing,
            sampling_fraction=sampling_fraction,
            seed=seed,
        )

    def display(self):
        print("N-gram configuration")
        for k, v in self.__dict__.items():
            print(f"{k}, {v}")
