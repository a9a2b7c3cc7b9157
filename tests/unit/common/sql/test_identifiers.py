from common.sql.identifiers import parse_table_name, quote_identifier, quote_qualified


def test_quote_identifier_doubles_quotes():
    """Embedded double quotes are escaped and NUL bytes removed."""
    assert quote_identifier("users") == '"users"'
    assert quote_identifier('a"b') == '"a""b"'
    assert quote_identifier("a\x00b") == '"ab"'


def test_quote_qualified():
    """Schema is optional."""
    assert quote_qualified("public", "users") == '"public"."users"'
    assert quote_qualified(None, "users") == '"users"'
    assert quote_qualified("", "users") == '"users"'


def test_parse_table_name():
    """The first dot separates schema from table."""
    assert parse_table_name("users") == ("public", "users")
    assert parse_table_name("app.users") == ("app", "users")
    assert parse_table_name(" app . users ") == ("app", "users")
    assert parse_table_name(".users", default_schema="tenant") == ("tenant", "users")
    assert parse_table_name("users", default_schema="tenant") == ("tenant", "users")
