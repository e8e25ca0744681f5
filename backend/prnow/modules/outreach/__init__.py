"""
Outreach Module

PR outreach workflow on top of the AI gateway:
- Entity models (project, outlets, contacts, campaigns, emails)
- Store with the email and campaign state machines, persisted as one blob
- Intelligence service (outlet discovery, contact finding, email drafting)
- Campaign service (bounded-concurrency batch drafting)
"""
