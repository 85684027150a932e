import io

import pytest

from delimcodec.core.errors import (
    ChannelError,
    FormatError,
    MalformedEncodingError,
    UnknownFieldError,
    UnknownVariantError,
)
from delimcodec.core.facade import DelimitedSerializer
from tests.fake.fake_channel import BrokenChannel, RecordingChannel
from tests.helpers import Car, CarOption, EngineType, Garage, Node, make_car, make_garage


def round_trip(serializer: DelimitedSerializer, value, cls):
    out = io.BytesIO()
    serializer.serialize(out, value)
    return serializer.deserialize(io.BytesIO(out.getvalue()), cls)


@pytest.mark.ut
def test_car_round_trip(serializer):
    initial = make_car()

    actual = round_trip(serializer, initial, Car)

    assert actual.model == "Volvo XC60"
    assert actual.power == 190
    assert actual.engine_type is EngineType.DIESEL
    assert actual.used is True
    assert actual.options == initial.options
    assert actual.mileage == {"2017": 133.5, "2018": 4113.5, "2019": 727.8}
    assert actual == initial


@pytest.mark.ut
def test_garage_round_trip(serializer):
    initial = make_garage()
    assert round_trip(serializer, initial, Garage) == initial


@pytest.mark.ut
def test_null_field_round_trip(serializer):
    actual = round_trip(serializer, Car(model=None), Car)
    assert actual.model is None


@pytest.mark.ut
def test_absent_containers_stay_absent(serializer):
    actual = round_trip(serializer, Car(model="Some model"), Car)

    assert actual.model == "Some model"
    assert actual.options is None
    assert actual.mileage is None


@pytest.mark.ut
def test_set_semantics(serializer):
    navi = CarOption("Navi pack", 1200.50)
    safety = CarOption("Safety pack", 755.25)
    optional = CarOption("Optional pack", 566.45)

    actual = round_trip(serializer, Car(options={navi, safety}), Car)

    assert len(actual.options) == 2
    assert navi in actual.options
    assert safety in actual.options
    assert optional not in actual.options


@pytest.mark.ut
def test_mapping_with_mixed_nulls(serializer):
    mileage = {"2017": 133.5, "2018": None, None: 22.2}

    actual = round_trip(serializer, Car(mileage=mileage), Car)

    assert len(actual.mileage) == 3
    assert actual.mileage["2017"] == 133.5
    assert actual.mileage["2018"] is None
    assert actual.mileage[None] == 22.2


@pytest.mark.ut
def test_enum_field_round_trip(serializer):
    actual = round_trip(serializer, Car(engine_type=EngineType.HYBRID), Car)
    assert actual.engine_type is EngineType.HYBRID


@pytest.mark.ut
def test_self_referencing_type_round_trip(serializer):
    chain = Node(label="a", next=Node(label="b", next=Node(label="c")))
    assert round_trip(serializer, chain, Node) == chain


@pytest.mark.ut
def test_dumps_uses_charset(registry):
    data = DelimitedSerializer(registry=registry).dumps(Car(model="x"))
    assert data.startswith(b"model=x\xc2\xb3power=null")

    latin = DelimitedSerializer(registry=registry, charset="latin-1")
    data = latin.dumps(Car(model="x"))
    assert data.startswith(b"model=x\xb3power=null")
    assert latin.loads(data, Car) == Car(model="x")


@pytest.mark.ut
def test_unrepresentable_text(registry):
    latin = DelimitedSerializer(registry=registry, charset="latin-1")
    with pytest.raises(FormatError):
        latin.dumps(Car(model="€"))


@pytest.mark.ut
def test_invalid_bytes(serializer):
    with pytest.raises(MalformedEncodingError):
        serializer.loads(b"model=\xff", Car)


@pytest.mark.ut
def test_unknown_field_is_not_dropped(serializer):
    with pytest.raises(UnknownFieldError):
        serializer.loads("wheels=4".encode(), Car)


@pytest.mark.ut
def test_unknown_variant(serializer):
    with pytest.raises(UnknownVariantError):
        serializer.loads(b"engine_type=STEAM", Car)


@pytest.mark.ut
def test_non_numeric_integer(serializer):
    with pytest.raises(FormatError):
        serializer.loads(b"power=fast", Car)


@pytest.mark.ut
def test_channel_is_left_open(serializer):
    channel = RecordingChannel()

    serializer.serialize(channel, make_car())

    assert len(channel.chunks) == 1
    assert channel.closed is False
    assert serializer.deserialize(RecordingChannel(channel.chunks[0]), Car) == make_car()


@pytest.mark.ut
def test_write_failure(serializer):
    channel = BrokenChannel()

    with pytest.raises(ChannelError):
        serializer.serialize(channel, make_car())
    assert channel.write_calls == 1


@pytest.mark.ut
def test_read_failure(serializer):
    with pytest.raises(ChannelError) as info:
        serializer.deserialize(BrokenChannel(), Car)
    assert isinstance(info.value.__cause__, OSError)


@pytest.mark.ut
def test_calls_are_independent(serializer):
    first = serializer.dumps(make_car())
    second = serializer.dumps(make_car())

    assert serializer.loads(first, Car) == serializer.loads(second, Car)


@pytest.mark.ut
def test_out_of_range_numbers_are_rejected_on_write(serializer):
    with pytest.raises(FormatError):
        serializer.dumps(Garage(history=(1e39,)))
    with pytest.raises(FormatError):
        serializer.dumps(Garage(levels={EngineType.HYBRID: 2**31}))
    with pytest.raises(FormatError):
        serializer.dumps(Car(power=2**31))


@pytest.mark.ut
def test_latin1_runs_out_of_field_separators(registry):
    chain = None
    for index in range(80):
        chain = Node(label=str(index), next=chain)

    with pytest.raises(FormatError):
        DelimitedSerializer(registry=registry, charset="latin-1").dumps(chain)

    data = DelimitedSerializer(registry=registry).dumps(chain)
    assert DelimitedSerializer(registry=registry).loads(data, Node) == chain
