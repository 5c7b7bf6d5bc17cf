"""Resolver package for GraphQL schema.

Root queries, mutations and type field resolvers delegate to the functions in
the sibling modules, which own the database access.
"""
