import asyncio
import io
import logging
import zipfile

import httpx
import pytest

from apparel_studio.modules.brands import Brand
from apparel_studio.modules.bundles import (
    AssetBundler,
    BundleError,
    InMemoryArchiveDelivery,
)
from apparel_studio.modules.bundles import service as bundle_service
from apparel_studio.modules.orders import Attachment, Order

CDN = "https://cdn.test"


def make_order(title="Summer Drop", attachments=()):
    return Order(
        id="order-1",
        customer_id="cust-1",
        brand_id="brand-1",
        title=title,
        attachments=[
            Attachment(id=f"att-{index}", order_id="order-1", name=name, url=url, type=kind)
            for index, (name, url, kind) in enumerate(attachments)
        ],
    )


def make_brand(logo_url=None, reference_assets=()):
    return Brand(
        id="brand-1",
        customer_id="cust-1",
        name="Northwind",
        logo_url=logo_url,
        reference_assets=list(reference_assets),
    )


def serve(assets, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        content = assets.get(str(request.url))
        if content is None:
            return httpx.Response(404)
        return httpx.Response(200, content=content)

    return httpx.MockTransport(handler)


def run_bundle(bundler, order, brand):
    delivery = InMemoryArchiveDelivery()
    result = asyncio.run(bundler.bundle(order, brand, delivery))
    return result, delivery


def read_zip(data):
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.testzip() is None
        return {name: archive.read(name) for name in archive.namelist()}


def test_empty_order_without_brand_contains_only_the_three_folders():
    result, _ = run_bundle(AssetBundler(transport=serve({})), make_order(), None)

    assert result is not None
    assert result.filename == "Summer_Drop_Bundle.zip"
    assert set(read_zip(result.data)) == {
        "Summer_Drop_Bundle/Admin_Finals/",
        "Summer_Drop_Bundle/Client_Briefs/",
        "Summer_Drop_Bundle/Brand_Identity/",
    }


def test_attachments_are_routed_by_type():
    order = make_order(
        attachments=[
            ("front.png", f"{CDN}/front.png", "result"),
            ("sketch.pdf", f"{CDN}/sketch.pdf", "document"),
            ("photo.jpg", f"{CDN}/photo.jpg", "image"),
            ("back.png", f"{CDN}/back.png", "result"),
        ]
    )
    assets = {
        f"{CDN}/front.png": b"front",
        f"{CDN}/sketch.pdf": b"sketch",
        f"{CDN}/photo.jpg": b"photo",
        f"{CDN}/back.png": b"back",
    }

    result, _ = run_bundle(AssetBundler(transport=serve(assets)), order, None)
    entries = read_zip(result.data)

    assert entries["Summer_Drop_Bundle/Admin_Finals/front.png"] == b"front"
    assert entries["Summer_Drop_Bundle/Admin_Finals/back.png"] == b"back"
    assert entries["Summer_Drop_Bundle/Client_Briefs/sketch.pdf"] == b"sketch"
    assert entries["Summer_Drop_Bundle/Client_Briefs/photo.jpg"] == b"photo"
    assert {name for name in entries if name.startswith("Summer_Drop_Bundle/Admin_Finals/")} == {
        "Summer_Drop_Bundle/Admin_Finals/",
        "Summer_Drop_Bundle/Admin_Finals/front.png",
        "Summer_Drop_Bundle/Admin_Finals/back.png",
    }


def test_one_unreachable_asset_is_skipped_and_logged(caplog):
    order = make_order(
        attachments=[
            ("a.png", f"{CDN}/a.png", "image"),
            ("b.png", f"{CDN}/b.png", "image"),
            ("gone.png", f"{CDN}/gone.png", "image"),
            ("c.png", f"{CDN}/c.png", "result"),
        ]
    )
    assets = {f"{CDN}/a.png": b"a", f"{CDN}/b.png": b"b", f"{CDN}/c.png": b"c"}

    with caplog.at_level(logging.WARNING, logger="apparel_studio.modules.bundles.service"):
        result, _ = run_bundle(AssetBundler(transport=serve(assets)), order, None)

    files = [name for name in read_zip(result.data) if not name.endswith("/")]
    assert len(files) == 3
    assert "Summer_Drop_Bundle/Client_Briefs/gone.png" not in files
    assert any("gone.png" in record.getMessage() for record in caplog.records)


def test_transport_errors_are_treated_like_missing_assets():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/broken":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, content=b"ok")

    order = make_order(
        attachments=[
            ("ok.txt", f"{CDN}/ok", "document"),
            ("broken.txt", f"{CDN}/broken", "document"),
        ]
    )
    result, _ = run_bundle(AssetBundler(transport=httpx.MockTransport(handler)), order, None)

    files = [name for name in read_zip(result.data) if not name.endswith("/")]
    assert files == ["Summer_Drop_Bundle/Client_Briefs/ok.txt"]


def test_title_whitespace_becomes_underscores():
    order = make_order(title="Fall\tDrop  2026 & Hoodies!")

    result, _ = run_bundle(AssetBundler(transport=serve({})), order, None)

    assert result.filename == "Fall_Drop_2026_&_Hoodies!_Bundle.zip"
    assert all(name.startswith("Fall_Drop_2026_&_Hoodies!_Bundle/") for name in read_zip(result.data))


def test_contents_do_not_depend_on_completion_order():
    delays = {"/first": 0.05, "/second": 0.0, "/third": 0.02}

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(delays[request.url.path])
        return httpx.Response(200, content=request.url.path.encode())

    order = make_order(
        attachments=[
            ("same.png", f"{CDN}/first", "image"),
            ("same.png", f"{CDN}/second", "image"),
            ("", f"{CDN}/third", "result"),
        ]
    )
    result, _ = run_bundle(AssetBundler(transport=httpx.MockTransport(handler)), order, None)
    entries = read_zip(result.data)

    assert entries["Summer_Drop_Bundle/Client_Briefs/same.png"] == b"/first"
    assert entries["Summer_Drop_Bundle/Client_Briefs/same_2.png"] == b"/second"
    assert entries["Summer_Drop_Bundle/Admin_Finals/file_2"] == b"/third"


def test_brand_without_assets_leaves_brand_folder_empty():
    result, _ = run_bundle(AssetBundler(transport=serve({})), make_order(), make_brand())

    entries = read_zip(result.data)
    assert "Summer_Drop_Bundle/Brand_Identity/" in entries
    assert not [name for name in entries if name.startswith("Summer_Drop_Bundle/Brand_Identity/") and name[-1] != "/"]


def test_brand_logo_and_reference_assets():
    brand = make_brand(
        logo_url=f"{CDN}/brand/logo-final.svg",
        reference_assets=[
            f"{CDN}/brand/moodboard.jpg?v=3",
            f"{CDN}/brand/",
            f"{CDN}/brand/logo",
        ],
    )
    assets = {
        f"{CDN}/brand/logo-final.svg": b"<svg/>",
        f"{CDN}/brand/moodboard.jpg?v=3": b"mood",
        f"{CDN}/brand/": b"index",
        f"{CDN}/brand/logo": b"reference-logo",
    }

    result, _ = run_bundle(AssetBundler(transport=serve(assets)), make_order(), brand)
    entries = read_zip(result.data)

    assert entries["Summer_Drop_Bundle/Brand_Identity/logo"] == b"<svg/>"
    assert entries["Summer_Drop_Bundle/Brand_Identity/moodboard.jpg"] == b"mood"
    assert entries["Summer_Drop_Bundle/Brand_Identity/ref_1"] == b"index"
    assert entries["Summer_Drop_Bundle/Brand_Identity/logo_2"] == b"reference-logo"


def test_serialisation_failure_raises_and_skips_delivery(monkeypatch):
    def explode(root, entries):
        raise MemoryError("out of memory")

    monkeypatch.setattr(bundle_service, "write_archive", explode)
    delivery = InMemoryArchiveDelivery()

    with pytest.raises(BundleError, match="Bundling failed"):
        asyncio.run(AssetBundler(transport=serve({})).bundle(make_order(), None, delivery))

    assert delivery.last is None


def test_delivery_failure_is_reported_as_bundle_error():
    class BrokenDelivery:
        async def deliver(self, data, filename):
            raise OSError("disk full")

    with pytest.raises(BundleError):
        asyncio.run(AssetBundler(transport=serve({})).bundle(make_order(), None, BrokenDelivery()))


def test_missing_order_is_a_no_op():
    calls = []
    delivery = InMemoryArchiveDelivery()
    brand = make_brand(logo_url=f"{CDN}/logo.svg")

    result = asyncio.run(AssetBundler(transport=serve({}, calls)).bundle(None, brand, delivery))

    assert result is None
    assert calls == []
    assert delivery.last is None


def test_max_concurrency_caps_in_flight_fetches():
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(200, content=b"x")

    order = make_order(attachments=[(f"{index}.png", f"{CDN}/{index}.png", "image") for index in range(8)])
    bundler = AssetBundler(max_concurrency=2, transport=httpx.MockTransport(handler))

    result, _ = run_bundle(bundler, order, None)

    assert peak <= 2
    assert len([name for name in read_zip(result.data) if not name.endswith("/")]) == 8


def test_fetches_run_concurrently_when_unbounded():
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(200, content=b"x")

    order = make_order(attachments=[(f"{index}.png", f"{CDN}/{index}.png", "image") for index in range(5)])

    run_bundle(AssetBundler(transport=httpx.MockTransport(handler)), order, None)

    assert peak == 5


async def _serve_trickle(byte_count, interval):
    """Local HTTP server: ``/slow.bin`` trickles one byte per ``interval``, anything else answers at once."""
    handlers = set()

    async def handle(reader, writer):
        handlers.add(asyncio.current_task())
        try:
            request_line = await reader.readline()
            while (await reader.readline()) not in (b"\r\n", b""):
                pass
            path = request_line.split()[1].decode()
            if path == "/slow.bin":
                writer.write(
                    f"HTTP/1.1 200 OK\r\nContent-Length: {byte_count}\r\nConnection: close\r\n\r\n".encode()
                )
                for _ in range(byte_count):
                    writer.write(b"x")
                    await writer.drain()
                    await asyncio.sleep(interval)
            else:
                writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 5\r\nConnection: close\r\n\r\nquick")
                await writer.drain()
        except ConnectionError:
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, handlers, f"http://127.0.0.1:{port}"


def _bundle_from_trickle_server(fetch_timeout, byte_count, interval):
    async def scenario():
        server, handlers, base = await _serve_trickle(byte_count, interval)
        order = make_order(
            title="T",
            attachments=[
                ("slow.bin", f"{base}/slow.bin", "result"),
                ("quick.txt", f"{base}/quick.txt", "document"),
            ],
        )
        delivery = InMemoryArchiveDelivery()
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            await AssetBundler(fetch_timeout=fetch_timeout).bundle(order, None, delivery)
        finally:
            elapsed = loop.time() - started
            for handler in handlers:
                handler.cancel()
            server.close()
        return elapsed, read_zip(delivery.last.data)

    return asyncio.run(scenario())


@pytest.fixture()
def no_proxy(monkeypatch):
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)


def test_fetch_timeout_is_a_deadline_for_the_whole_download(no_proxy, caplog):
    # every byte arrives well inside the timeout, the full body does not
    with caplog.at_level(logging.WARNING, logger="apparel_studio.modules.bundles.service"):
        elapsed, entries = _bundle_from_trickle_server(fetch_timeout=0.5, byte_count=10, interval=0.2)

    assert elapsed < 1.5
    assert "T_Bundle/Admin_Finals/slow.bin" not in entries
    assert entries["T_Bundle/Client_Briefs/quick.txt"] == b"quick"
    assert any("slow.bin" in record.getMessage() for record in caplog.records)


def test_slow_download_within_the_deadline_is_kept(no_proxy):
    _, entries = _bundle_from_trickle_server(fetch_timeout=5.0, byte_count=4, interval=0.05)

    assert entries["T_Bundle/Admin_Finals/slow.bin"] == b"xxxx"
    assert entries["T_Bundle/Client_Briefs/quick.txt"] == b"quick"
