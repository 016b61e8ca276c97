#!/usr/bin/env python3
"""
Site report example for DocTreeLib.

This example demonstrates:
- Loading a repository file into the in-memory NodeStore
- Printing the document tree as a table and as text lines
- Previewing which pages a limited, leaves-first removal would hit
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from doctreelib import ConsoleOutput, ContentRepositoryService, MemoryNodeStore
from doctreelib.testing import build_sample_site


def main():
    """Print a report for a repository file, or for the sample site."""
    if len(sys.argv) > 1:
        store = MemoryNodeStore.load(sys.argv[1])
    else:
        store = build_sample_site()

    service = ContentRepositoryService(store)
    service.setup()
    output = ConsoleOutput()

    print(f"Site: {service.current_site.name} ({service.site_path})")
    print("-" * 50)
    service.document_tree_printer(service.root_node, depth=2).print_tree(output)

    print("\nAs text:")
    service.document_tree_printer(service.root_node, depth=2).print_tree(output, as_table=False)

    print("\nFirst three pages a 'page remove --limit 3' would delete:")
    for node in service.walk_documents(service.root_node, limit=3):
        print(f"  {node.path()}")


if __name__ == "__main__":
    print("DocTreeLib - Site Report Example")
    print("=" * 50)
    main()
