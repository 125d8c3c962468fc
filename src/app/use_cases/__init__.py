"""
Use Cases

Organized into domain folders:
- auth/: Password and OAuth sign-in, password reset
- accounts/: Provisioning, profile and account lifecycle
- audit/: Audit trail
- facilities/: Tenant-scoped facilities
"""
