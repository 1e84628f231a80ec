import pytest

from tapstack import ByteBuffer, OversizeError, MAX_SCRIPT_ELEMENT_SIZE


class TestByteBuffer:

    @pytest.mark.parametrize("data", (b'', b'\0', b'foo', bytes(MAX_SCRIPT_ELEMENT_SIZE)))
    def test_create(self, data):
        item = ByteBuffer.create(data)
        assert isinstance(item, ByteBuffer)
        assert item == data
        assert len(item) == len(data)

    def test_create_from_bytearray(self):
        data = bytearray(b'bar')
        item = ByteBuffer(data)
        data[0] = 0
        assert item == b'bar'

    def test_create_from_buffer(self):
        item = ByteBuffer(b'foo')
        assert ByteBuffer(item) is item

    def test_oversize(self):
        with pytest.raises(OversizeError) as e:
            ByteBuffer(bytes(MAX_SCRIPT_ELEMENT_SIZE + 1))
        assert str(e.value) == 'item length 521 exceeds the limit of 520 bytes'

    @pytest.mark.parametrize("data", (1, 50_000_000, 'foo', [1, 2]))
    def test_not_bytes_like(self, data):
        with pytest.raises(TypeError):
            ByteBuffer(data)

    def test_oversize_view(self):
        data = bytes(100_000)
        with pytest.raises(OversizeError) as e:
            ByteBuffer(memoryview(data)[:MAX_SCRIPT_ELEMENT_SIZE + 1])
        assert str(e.value) == 'item length 521 exceeds the limit of 520 bytes'
        assert ByteBuffer(memoryview(data)[:MAX_SCRIPT_ELEMENT_SIZE]) == bytes(520)

    def test_limit(self):
        ByteBuffer(bytes(600), limit=600)
        with pytest.raises(OversizeError):
            ByteBuffer(bytes(5), limit=4)
        # A buffer made under a looser limit is checked against a tighter one
        item = ByteBuffer(bytes(600), limit=600)
        with pytest.raises(OversizeError):
            ByteBuffer(item)

    @pytest.mark.parametrize("left,right", (
        (b'foo', b'bar'),
        (b'', b'tender'),
        (b'\1', b''),
    ))
    def test_concat(self, left, right):
        a = ByteBuffer(left)
        b = ByteBuffer(right)
        result = a.concat(b)
        assert isinstance(result, ByteBuffer)
        assert result == left + right
        assert a == left
        assert b == right
        assert ByteBuffer.concat(a, b) == result

    def test_concat_size_enforced(self):
        a = ByteBuffer(bytes(500))
        assert len(a.concat(bytes(20))) == MAX_SCRIPT_ELEMENT_SIZE
        with pytest.raises(OversizeError) as e:
            a.concat(bytes(21))
        assert str(e.value) == 'concatenated length 521 exceeds the limit of 520 bytes'
        assert a == bytes(500)

    def test_immutable(self):
        item = ByteBuffer(b'foo')
        with pytest.raises(TypeError):
            item[0] = 1

    def test_repr(self):
        assert repr(ByteBuffer(b'\xab')) == "ByteBuffer(b'\\xab')"
