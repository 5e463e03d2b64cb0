"""ONNX Runtime adapter for the Basic Pitch model."""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

import numpy as np

from .activations import ActivationGrids
from .adapter import InferenceAdapter
from ..core import ModelConfig, ConfigurationError, ModelOutputShapeError

logger = logging.getLogger(__name__)

# Output tensor names of the ICASSP 2022 export
DEFAULT_OUTPUT_NAMES = {
    "note": "StatefulPartitionedCall:1",
    "onset": "StatefulPartitionedCall:2",
    "contour": "StatefulPartitionedCall:0",
}
DEFAULT_INPUT_NAME = "serving_default_input_2:0"


class OnnxBasicPitchAdapter(InferenceAdapter):
    """Run a Basic Pitch ONNX model on one window at a time."""

    def __init__(
        self,
        model_path: str,
        model: Optional[ModelConfig] = None,
        providers: Optional[Sequence[str]] = None,
        output_names: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize OnnxBasicPitchAdapter.

        Args:
            model_path: Path to the .onnx file
            model: Model geometry the session must match
            providers: ONNX Runtime execution providers (default: CPU)
            output_names: Mapping of note/onset/contour to tensor names

        Raises:
            FileNotFoundError: If the model file doesn't exist
            ConfigurationError: If the model's input length doesn't match
            ModelOutputShapeError: If an expected output is missing
        """
        path = Path(model_path)
        if not path.exists():
            raise FileNotFoundError(f"Model file not found: {path}")

        import onnxruntime as ort

        self.model = model or ModelConfig()
        self.output_names = dict(output_names or DEFAULT_OUTPUT_NAMES)
        self.session = ort.InferenceSession(
            str(path),
            providers=list(providers or ["CPUExecutionProvider"]),
        )
        self.input_name = self._resolve_input_name()
        self._validate_session()

    def _resolve_input_name(self) -> str:
        names = [i.name for i in self.session.get_inputs()]
        return DEFAULT_INPUT_NAME if DEFAULT_INPUT_NAME in names else names[0]

    def _validate_session(self) -> None:
        inputs = {i.name: i for i in self.session.get_inputs()}
        shape = inputs[self.input_name].shape
        # Symbolic dimensions come back as strings
        if len(shape) >= 2 and isinstance(shape[1], int) and shape[1] != self.model.window_length:
            raise ConfigurationError(
                f"Model expects input length {shape[1]}, "
                f"configured window length is {self.model.window_length}"
            )

        available = {o.name for o in self.session.get_outputs()}
        missing = [n for n in self.output_names.values() if n not in available]
        if missing:
            raise ModelOutputShapeError(
                f"Model outputs {missing} not found; available: {sorted(available)}"
            )
        logger.info("Loaded ONNX model with providers %s", self.session.get_providers())

    def infer(self, window: np.ndarray) -> ActivationGrids:
        """Run the session on one window and strip the batch axis."""
        batch = window.astype(np.float32).reshape(1, -1, 1)
        names = [self.output_names[k] for k in ("note", "onset", "contour")]
        note, onset, contour = self.session.run(names, {self.input_name: batch})
        return ActivationGrids(
            note=self._unbatch(note, "note"),
            onset=self._unbatch(onset, "onset"),
            contour=self._unbatch(contour, "contour"),
        )

    @staticmethod
    def _unbatch(tensor: np.ndarray, name: str) -> np.ndarray:
        if tensor.ndim != 3 or tensor.shape[0] != 1:
            raise ModelOutputShapeError(
                f"Expected {name} output shaped [1, frames, channels], got {tensor.shape}"
            )
        return tensor[0]
