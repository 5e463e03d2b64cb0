"""Model layer - Boundary to the pitch-detection model.

The core never runs the model itself; it consumes grids through
`InferenceAdapter.infer`. `OnnxBasicPitchAdapter` imports onnxruntime
only when constructed.
"""

from .activations import ActivationGrids, sigmoid
from .adapter import InferenceAdapter
from .onnx import OnnxBasicPitchAdapter

__all__ = [
    "ActivationGrids",
    "InferenceAdapter",
    "OnnxBasicPitchAdapter",
    "sigmoid",
]
