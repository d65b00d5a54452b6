from .models import CompositeStateConfig, build_composite

__all__ = [
    "CompositeStateConfig",
    "build_composite",
]
