import pytest
from plugin import create_deploy_plugin
from repository.consul_store import ConsulKeyValueStore
from repository.redis_store import RedisKeyValueStore
from util.errors import ConfigurationError, MissingRevisionKeyError, UnknownRevisionError


def _context(store, **extra):
    config = {"namespaceToken": "foo", "storeClient": store}
    config.update(extra.pop("config", {}))
    return {"config": {"kv-index": config}, **extra}


async def test_upload_hook_reads_asset_from_dist_dir(store, tmp_path):
    (tmp_path / "index.html").write_text("<html>hi</html>", encoding="utf-8")
    plugin = create_deploy_plugin("kv-index")
    context = _context(
        store,
        distDir=str(tmp_path),
        revisionData={"revisionKey": "abc"},
    )

    await plugin.upload(context)

    assert store.data["foo/revisions/abc"] == "<html>hi</html>"
    assert store.data["foo/revisions/abc/metadata"] == '{"revisionKey": "abc"}'
    assert store.data["foo/recent-revisions"] == "abc"


async def test_upload_hook_uses_configured_tokens(store, tmp_path):
    (tmp_path / "index.html").write_text("x", encoding="utf-8")
    plugin = create_deploy_plugin("kv-index")
    context = _context(
        store,
        distDir=str(tmp_path),
        revisionData={"revisionKey": "abc"},
        config={"recentRevisionsToken": "history"},
    )

    await plugin.upload(context)

    assert store.data["foo/history"] == "abc"


async def test_activate_hook_without_revision_option(store):
    store.data["foo/recent-revisions"] = "1234"
    plugin = create_deploy_plugin("kv-index")

    with pytest.raises(MissingRevisionKeyError):
        await plugin.activate(_context(store))


async def test_activate_hook_with_unknown_revision(store, caplog):
    store.data["foo/recent-revisions"] = "1234"
    plugin = create_deploy_plugin("kv-index")

    with pytest.raises(UnknownRevisionError):
        await plugin.activate(_context(store, commandOptions={"revision": "abcd"}))

    assert "code=unknown_revision" in caplog.text


async def test_activate_hook_activates(store):
    store.data["foo/recent-revisions"] = "1234"
    store.data["foo/active-revision"] = "qwerty"
    plugin = create_deploy_plugin("kv-index")

    await plugin.activate(_context(store, commandOptions={"revision": "1234"}))

    assert store.data["foo/active-revision"] == "1234"


async def test_fetch_revisions_hook_returns_plain_dicts(store):
    store.data["foo/recent-revisions"] = "b,a"
    store.data["foo/active-revision"] = "a"
    plugin = create_deploy_plugin("kv-index")

    result = await plugin.fetch_revisions(_context(store))

    assert result == {
        "revisions": [
            {"revision": "b", "active": False},
            {"revision": "a", "active": True},
        ]
    }


async def test_hooks_need_a_store_client():
    plugin = create_deploy_plugin("kv-index")

    with pytest.raises(ConfigurationError):
        await plugin.fetch_revisions({"project": "foo"})


async def test_setup_builds_consul_client_and_teardown_closes_it():
    plugin = create_deploy_plugin("kv-index")
    context = {"config": {"kv-index": {"host": "consul.local", "port": 8501, "secure": False}}}

    result = await plugin.setup(context)

    client = result["storeClient"]
    assert isinstance(client, ConsulKeyValueStore)
    assert client.base_url == "http://consul.local:8501"
    await plugin.teardown(context)


async def test_null_command_options_and_config_read_as_empty(store):
    store.data["foo/recent-revisions"] = "b,a"
    plugin = create_deploy_plugin("kv-index")

    result = await plugin.fetch_revisions({**_context(store), "commandOptions": None})
    assert [r["revision"] for r in result["revisions"]] == ["b", "a"]

    with pytest.raises(MissingRevisionKeyError):
        await plugin.activate({**_context(store), "commandOptions": None})

    options = plugin.configure({"config": None, "project": "bar"})
    assert options.namespaceToken == "bar"


async def test_malformed_context_raises_configuration_error(store, caplog):
    plugin = create_deploy_plugin("kv-index")

    with pytest.raises(ConfigurationError) as exc:
        await plugin.fetch_revisions({**_context(store), "distDir": ["not", "a", "path"]})

    assert exc.value.option.startswith("distDir")
    assert "plugin.configure.failed" in caplog.text
    assert "code=invalid_config" in caplog.text


async def test_numeric_revision_option_is_activated_as_string(store):
    store.data["foo/recent-revisions"] = "1234"
    plugin = create_deploy_plugin("kv-index")

    await plugin.activate(_context(store, commandOptions={"revision": 1234}))

    assert store.data["foo/active-revision"] == "1234"


async def test_second_setup_closes_the_previous_client():
    plugin = create_deploy_plugin("kv-index")
    context = {"config": {"kv-index": {"secure": False}}}

    first = (await plugin.setup(context))["storeClient"]
    second = (await plugin.setup(context))["storeClient"]

    assert first is not second
    assert first._client.is_closed
    assert not second._client.is_closed
    await plugin.teardown(context)
    assert second._client.is_closed


async def test_setup_builds_redis_client():
    plugin = create_deploy_plugin("kv-index")
    context = {
        "config": {"kv-index": {"backend": "redis", "redisUrl": "redis://localhost:6379/5"}}
    }

    result = await plugin.setup(context)

    assert isinstance(result["storeClient"], RedisKeyValueStore)
    await plugin.teardown(context)
