"""Release services.

Services sequence the external tools: publishing packages and driving
the build/test/publish pipeline.
"""

from cikit.services.errors import PipelineError, StageError
from cikit.services.pipeline import Pipeline, ReleasePlan
from cikit.services.publish import Publisher

__all__ = [
    "Pipeline",
    "PipelineError",
    "Publisher",
    "ReleasePlan",
    "StageError",
]
