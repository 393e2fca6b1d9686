"""Build-graph collaborators: analysis context and argument files."""

from oneversion.graph.context import AnalysisContext, ArtifactOwnerRegistry
from oneversion.graph.params import render_param_file, write_param_file

__all__ = ["AnalysisContext", "ArtifactOwnerRegistry", "render_param_file", "write_param_file"]
