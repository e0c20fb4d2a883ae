"""RBAC admin API: users, roles and a permission tree behind JWT auth."""
