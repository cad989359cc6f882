import psycopg
import pytest

from common.db_utils import check_database_connection, quote_identifier, quote_literal


@pytest.mark.parametrize("name", ["paperless", "paperlessdb", "_x1", "User_2"])
def test_quote_identifier_accepts_plain_names(name):
    assert quote_identifier(name) == name


@pytest.mark.parametrize("name", ["", "1db", "pa-per", "x; DROP TABLE y", "a b", "p'q"])
def test_quote_identifier_rejects_others(name):
    with pytest.raises(ValueError):
        quote_identifier(name)


def test_quote_literal_doubles_quotes():
    assert quote_literal("UTC") == "'UTC'"
    assert quote_literal("it's") == "'it''s'"


def test_check_database_connection_success(mocker, mock_logger):
    mock_connect = mocker.patch("common.db_utils.psycopg.connect")
    cursor = mock_connect.return_value.__enter__.return_value.cursor.return_value.__enter__.return_value

    assert check_database_connection("db", 5432, "paperless", "u", "p", current_logger=mock_logger)

    mock_connect.assert_called_once_with(
        host="db",
        port=5432,
        dbname="paperless",
        user="u",
        password="p",
        connect_timeout=10,
    )
    cursor.execute.assert_called_once_with("SELECT 1")


def test_check_database_connection_failure(mocker, mock_logger):
    mocker.patch(
        "common.db_utils.psycopg.connect",
        side_effect=psycopg.OperationalError("connection refused"),
    )

    assert not check_database_connection("db", 5432, "paperless", "u", "p", current_logger=mock_logger)
    assert "connection refused" in mock_logger.error.call_args.args[0]
