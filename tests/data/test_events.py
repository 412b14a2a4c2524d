import pytest

from lexis.data.events import CellSetBinaryOp, CellSetBinaryOpType, SelectedIDs, ToggleIDRequest
from lexis.message import DecodeError


def test_id_lists():
    request = ToggleIDRequest([1, 2, 3])
    assert request.ids == [1, 2, 3]
    assert request.to_dict() == {"ids": [1, 2, 3]}
    assert ToggleIDRequest.from_json(request.to_json()) == request
    # same ids, different message type
    assert request != SelectedIDs([1, 2, 3])


def test_ids_are_uint32():
    with pytest.raises(ValueError):
        SelectedIDs([-1])
    with pytest.raises(ValueError):
        SelectedIDs([2 ** 32])
    with pytest.raises(DecodeError):
        SelectedIDs.from_json('{"ids": [-5]}')


def test_cell_set_binary_op():
    op = CellSetBinaryOp([1, 2], [3], CellSetBinaryOpType.PROJECTIONS)
    assert op.to_dict() == {"first": [1, 2], "second": [3], "operation": "projections"}
    assert CellSetBinaryOp.from_json(op.to_json()) == op


def test_script_operation_names():
    assert CellSetBinaryOpType.from_script_name("SYNAPTIC_PROJECTIONS") is CellSetBinaryOpType.PROJECTIONS
    with pytest.raises(ValueError):
        CellSetBinaryOpType.from_script_name("UNION")
