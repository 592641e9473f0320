"""
Typed errors for model initialization and embedding.
InitError covers loading; EmbedError covers per-call failures that leave the service usable.
"""


class InitError(Exception):
    """Model initialization failed."""


class MissingAssetError(InitError):
    """A required model asset file is not present in the asset directory."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"Missing required model file: {file_name}")
        self.file_name = file_name


class BackendLoadError(InitError):
    """The model backend could not load the assets. Carries the backend's message as-is."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class EmbedError(Exception):
    """Embedding a text failed."""


class NotInitializedError(EmbedError):
    """Embedding requested before the model finished loading successfully."""

    def __init__(self, message: str = "Model not initialized") -> None:
        super().__init__(message)


class BackendInferenceError(EmbedError):
    """Tokenization or inference failed in the backend, or its output was unusable."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details
