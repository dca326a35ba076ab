# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
spluggy: generate a Go plugin registry from packages that share one exported
function.

Pipeline:
  parser      Go source -> SourceFile (package, imports, function signatures)
  analyzer    SourceFile -> ExportedFunction descriptors (signature text + deps)
  aggregator  directory walk -> descriptors grouped by package key
  selector    package map -> the one function name common to every package
  emitter     selected function + package keys -> registry source text
"""

__all__ = ["analyzer", "aggregator", "selector", "emitter", "generate"]
