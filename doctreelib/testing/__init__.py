"""Testing utilities for DocTreeLib consumers."""

from .fixtures import BufferedOutput, build_sample_site, build_store, content, page

__all__ = ["BufferedOutput", "build_sample_site", "build_store", "content", "page"]
