"""ClinIQ Vault: department-scoped knowledge assistant."""
