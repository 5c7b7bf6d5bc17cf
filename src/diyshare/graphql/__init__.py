"""GraphQL API for DIY Share."""
