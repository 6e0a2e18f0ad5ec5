from savepicker.files.keys import construct_ref
from savepicker.files.metadata import FileRecord, MetadataStore, format_entry, parse_entry


def test_read_missing_entry_is_none(storage):
    meta = MetadataStore(storage)
    assert meta.read(construct_ref("nope", "save", "g")) is None


def test_write_creates_then_preserves_created(storage, clock):
    meta = MetadataStore(storage, clock=clock)
    ref = construct_ref("slot1", "save", "g")

    first = meta.write(ref)
    assert first.created == first.modified == 1_700_000_000_000
    assert storage.get(ref.entry_key) == "created:1700000000000,modified:1700000000000"

    second = meta.write(ref)
    assert second.created == 1_700_000_000_000
    assert second.modified == 1_700_000_001_000

    loaded = meta.read(ref)
    assert loaded == FileRecord(ref=ref, created=1_700_000_000_000, modified=1_700_000_001_000)


def test_parse_ignores_unknown_and_bad_fields():
    ref = construct_ref("f", "u", "g")
    record = parse_entry(ref, "binary:1,created:10,junk,modified:abc,gamename:zork")
    assert record.created == 10
    assert record.modified is None


def test_write_drops_unknown_fields(storage, clock):
    ref = construct_ref("f", "u", "g")
    storage.set(ref.entry_key, "created:5,binary:1")
    MetadataStore(storage, clock=clock).write(ref)
    assert storage.get(ref.entry_key) == "created:5,modified:1700000000000"


def test_prior_entry_without_created_keeps_none(storage, clock):
    ref = construct_ref("f", "u", "g")
    storage.set(ref.entry_key, "modified:1")
    record = MetadataStore(storage, clock=clock).write(ref)
    assert record.created is None
    assert format_entry(record) == "modified:1700000000000"


def test_exists_and_remove(storage, clock):
    meta = MetadataStore(storage, clock=clock)
    ref = construct_ref("f", "u", "g")
    assert not meta.exists(ref)

    meta.write(ref)
    storage.set(ref.content_key, "[]")
    assert meta.exists(ref)

    meta.remove(ref)
    assert not meta.exists(ref)
    assert storage.get(ref.content_key) is None

    # Removing again is harmless
    meta.remove(ref)
    assert storage.keys() == []


def test_exists_checks_entry_key_only(storage):
    meta = MetadataStore(storage)
    ref = construct_ref("f", "u", "g")
    storage.set(ref.content_key, "[1]")
    assert not meta.exists(ref)
    storage.set(ref.entry_key, "")
    assert meta.exists(ref)


def test_record_datetimes():
    ref = construct_ref("f", "u", "g")
    record = FileRecord(ref=ref, created=0, modified=None)
    assert record.created_at is not None
    assert record.created_at.year == 1970
    assert record.modified_at is None
    assert record.filename == "f"
