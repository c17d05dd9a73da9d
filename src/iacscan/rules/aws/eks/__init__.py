"""Rules for AWS Elastic Kubernetes Service resources."""
