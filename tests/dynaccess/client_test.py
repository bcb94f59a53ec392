from dynaccess.client import StoreConfig, config_from_env, make_client


def test_config_from_explicit_environment(tmp_path):
    config = config_from_env(
        dict(
            AWS_REGION="eu-west-1",
            AWS_ACCESS_KEY_ID="AKIA",
            AWS_SECRET_ACCESS_KEY="shh",
            AWS_SESSION_TOKEN="tok",
        ),
        dotenv_path=str(tmp_path / "missing.env"),
    )
    assert config == StoreConfig(
        region="eu-west-1", access_key_id="AKIA", secret_access_key="shh", session_token="tok"
    )
    assert config.has_static_credentials


def test_environment_wins_over_dotenv(tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text(
        "AWS_REGION=us-east-2\nDYNACCESS_ENDPOINT_URL=http://localhost:8000\nAWS_ACCESS_KEY_ID=fromfile\n"
    )
    config = config_from_env(dict(AWS_REGION="us-west-2"), dotenv_path=str(dotenv))

    assert config.region == "us-west-2"
    assert config.endpoint_url == "http://localhost:8000"
    # a key without a secret is not enough for static credentials
    assert not config.has_static_credentials


def test_empty_values_are_absent(tmp_path):
    config = config_from_env(
        dict(AWS_ACCESS_KEY_ID="", AWS_DEFAULT_REGION="ap-south-1"),
        dotenv_path=str(tmp_path / "missing.env"),
    )
    assert config.access_key_id is None
    assert config.region == "ap-south-1"


def test_make_client_with_static_credentials():
    client = make_client(
        StoreConfig(
            region="us-east-1",
            access_key_id="AKIA",
            secret_access_key="shh",
            endpoint_url="http://localhost:8000",
        )
    )
    assert client.meta.region_name == "us-east-1"
    assert client.meta.endpoint_url == "http://localhost:8000"
