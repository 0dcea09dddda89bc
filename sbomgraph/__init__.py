"""sbomgraph - dependency graph diagrams for SBOM reports."""

__version__ = "0.1.0"
