"""mdagen - model-driven code generation.

Core package for generating source trees from a platform-independent
meta-model. A generation run walks every class of the model once per
stereotype it carries, running the plugin scripts and Jinja2 templates a
platform provides for that stereotype.

This package contains:
- The meta-model and its mixin extension mechanism (mdagen.meta)
- The generation pipeline (mdagen.gen)
- Configuration and logging utilities (mdagen.utils)
- The command-line interface (mdagen.cli)
"""

# Version information
__version__ = "0.3.0"

__all__ = ["__version__"]

# Subpackages are imported on demand, e.g.: from mdagen.gen import GenerationPipeline
