"""Article generation published as GitHub issues."""
