"""
Toonpack Sticker Pipeline

Prompt building, generation, post-processing and export.
"""

from .prompts import build_prompt, get_available_body_types, get_available_emotions, get_available_styles
from .postprocess import PostProcessConfig, StickerPostProcessor
from .generator import BatchResult, GeneratedSticker, StickerGenerationError, StickerGenerator
from .export import PackExportError, StickerFile, create_sticker_zip, export_pack, sticker_filename

__all__ = [
    # Prompts
    "build_prompt",
    "get_available_styles",
    "get_available_body_types",
    "get_available_emotions",
    # Post-processing
    "PostProcessConfig",
    "StickerPostProcessor",
    # Generation
    "StickerGenerator",
    "GeneratedSticker",
    "BatchResult",
    "StickerGenerationError",
    # Export
    "StickerFile",
    "PackExportError",
    "create_sticker_zip",
    "export_pack",
    "sticker_filename",
]
