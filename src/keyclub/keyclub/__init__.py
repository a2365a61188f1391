"""Key Club Manager package.

Feature modules (students, hours, meetings, events, ...) each carry a domain
model, a repository interface, a Supabase-backed repository and a service,
with a thin Flask controller layer on top.
"""
