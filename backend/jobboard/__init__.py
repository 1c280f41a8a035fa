"""Job board backend: session auth, RBAC and job search."""
