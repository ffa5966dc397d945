"""Core data types for the policy-assist client."""
