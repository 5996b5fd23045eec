"""Internal plumbing shared across the package."""
