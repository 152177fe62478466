from openclaw.google.sheets import SheetsFacade


def test_sheet_titles(fake_sheets_service):
    svc = fake_sheets_service(("Offers", "Tasks"))
    assert SheetsFacade(svc).sheet_titles("ssid") == ["Offers", "Tasks"]


def test_get_metadata_with_fields(fake_sheets_service):
    svc = fake_sheets_service()
    SheetsFacade(svc).get_metadata("ssid", fields="sheets.properties")
    assert svc.calls[0] == ("get", "ssid", "sheets.properties")


def test_ensure_sheets_adds_only_missing_in_one_batch(fake_sheets_service):
    svc = fake_sheets_service(("Offers",))
    added = SheetsFacade(svc).ensure_sheets("ssid", ["Offers", "Tasks", "Landings"])

    assert added == ["Tasks", "Landings"]
    batches = [c for c in svc.calls if c[0] == "batchUpdate"]
    assert len(batches) == 1
    assert batches[0][2]["requests"] == [
        {"addSheet": {"properties": {"title": "Tasks"}}},
        {"addSheet": {"properties": {"title": "Landings"}}},
    ]


def test_ensure_sheets_noop_when_all_present(fake_sheets_service):
    svc = fake_sheets_service(("Offers",))
    assert SheetsFacade(svc).ensure_sheets("ssid", ["Offers"]) == []
    assert not any(c[0] == "batchUpdate" for c in svc.calls)


def test_append_values_inserts_rows_raw(fake_sheets_service):
    svc = fake_sheets_service()
    SheetsFacade(svc).append_values("ssid", "Offers!A:Z", [["a", "b"]])

    assert svc.calls[-1] == ("values.append", "ssid", "Offers!A:Z", "RAW", "INSERT_ROWS")
    assert svc.values_store["Offers!A:Z"] == [["a", "b"]]


def test_write_values(fake_sheets_service):
    svc = fake_sheets_service()
    SheetsFacade(svc).write_values("ssid", "Tasks!A1", [["h1", "h2"]])
    assert svc.values_store["Tasks!A1"] == [["h1", "h2"]]
