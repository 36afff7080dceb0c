from telemlog.core.record import DomainRecord, assemble_record, extract_section

FLAGS = {"flagA": [10, 20, 30]}


def test_defaults_without_items():
    record = assemble_record("VIN1", {"at": 1700000000000})
    assert record.to_dict() == {"id": "VIN1", "alarmLevel": 0, "at": 1700000000000}


def test_all_section_types():
    body = {
        "at": "2023-11-14T22:13:20.000Z",
        "items": [
            {"type": "MOTOR", "motors": [{"no": 1, "speed": 3000}]},
            {"type": "LOCATION", "lng": 120.1, "lat": 30.2, "state": 0},
            {"type": "EXTREME", "maxVoltage": 3.9, "minNtc": 12, "junk": True},
            {"type": "CUSTOM_EXT", "lftp": 8.2, "keyStatus": 2, "unknownField": 1},
            {"type": "TEN_SECONDS", "datas": [{"speed": 40}]},
            {"type": "ALARM", "maxLevel": 1, "uas": {"flagA": 1}},
        ],
    }
    out = assemble_record("VIN1", body, FLAGS).to_dict()
    assert out["id"] == "VIN1"
    assert out["at"] == body["at"]
    assert out["motors"] == [{"no": 1, "speed": 3000}]
    assert out["location"] == {"lng": 120.1, "lat": 30.2}
    assert out["extreme"] == {"maxVoltage": 3.9, "minNtc": 12}
    assert out["customExt"] == {"lftp": 8.2, "keyStatus": 2}
    assert out["adas"] == [{"speed": 40}]
    assert out["alarmLevel"] == 1
    assert out["alarms"] == ["a"]
    assert "vehicle" not in out


def test_vehicle_merges_record_snapshot():
    body = {
        "at": 1,
        "items": [
            {"type": "ALARM", "maxLevel": 3},
            {"type": "VEHICLE", "speed": 42, "soc": 80, "vin": "ignored"},
        ],
    }
    record = assemble_record("VIN1", body)
    assert record.vehicle == {
        "id": "VIN1",
        "alarmLevel": 3,
        "at": 1,
        "alarms": [],
        "speed": 42,
        "soc": 80,
    }


def test_vehicle_snapshot_is_a_copy():
    record = DomainRecord(id="VIN1", at=1)
    extract_section(record, {"type": "VEHICLE", "speed": 1})
    record.alarmLevel = 2
    assert record.vehicle["alarmLevel"] == 0


def test_later_section_overwrites_earlier():
    body = {
        "at": 1,
        "items": [
            {"type": "LOCATION", "lng": 1, "lat": 2},
            {"type": "LOCATION", "lng": 3, "lat": 4},
            {"type": "ALARM", "maxLevel": 2, "ressList": [{"type": 1, "code": 1, "level": 1}]},
            {"type": "ALARM", "maxLevel": 0},
        ],
    }
    record = assemble_record("VIN1", body)
    assert record.location == {"lng": 3, "lat": 4}
    assert record.alarmLevel == 0
    assert record.alarms == []


def test_unknown_section_types_ignored():
    body = {"at": 5, "items": [{"type": "FUEL_CELL", "x": 1}, {"nope": True}]}
    assert assemble_record("V", body).to_dict() == {"id": "V", "alarmLevel": 0, "at": 5}


def test_missing_lists_default_empty():
    record = assemble_record("V", {"items": [{"type": "MOTOR"}, {"type": "TEN_SECONDS"}]})
    assert record.motors == []
    assert record.adas == []
    assert record.at is None


def test_second_vehicle_nests_first_snapshot():
    body = {"at": 1, "items": [
        {"type": "VEHICLE", "speed": 1},
        {"type": "VEHICLE", "speed": 2},
    ]}
    record = assemble_record("V", body)
    assert record.vehicle == {
        "id": "V",
        "alarmLevel": 0,
        "at": 1,
        "vehicle": {"id": "V", "alarmLevel": 0, "at": 1, "speed": 1},
        "speed": 2,
    }


def test_missing_at_is_omitted():
    assert assemble_record("V", {"items": []}).to_dict() == {"id": "V", "alarmLevel": 0}
