"""genome-report: consumer genotype variant matching and risk scoring."""

__version__ = "0.1.0"
