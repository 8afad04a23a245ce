"""Compile versioned markdown trees into navigable static HTML."""

from .compiler import CompilationError, Compiler
from .models import Heading, NavigationNode
from .navigation import NavigationGenerator
from .pipeline import Pipeline, PipelineStage, build_pipeline
from .postcompilers import UsabilityPostCompiler
from .precompilers import GithubLinkPreCompiler
from .renderer import MarkdownConverter
from .version_switch import VersionSwitchGenerator

__all__ = [
    "CompilationError",
    "Compiler",
    "GithubLinkPreCompiler",
    "Heading",
    "MarkdownConverter",
    "NavigationGenerator",
    "NavigationNode",
    "Pipeline",
    "PipelineStage",
    "UsabilityPostCompiler",
    "VersionSwitchGenerator",
    "build_pipeline",
]
