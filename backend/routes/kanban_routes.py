from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from backend.auth.dependencies import get_storage
from backend.schemas.kanban import KanbanItem, KanbanItemCreate, KanbanItemUpdate, KanbanStatus
from backend.storage.storage import Storage

router = APIRouter(tags=['kanban'])

BOARD_COLUMNS = ('backlog', 'todo', 'in_progress', 'done')


def board_order(item: KanbanItem) -> tuple[int, object]:
    return BOARD_COLUMNS.index(item.status), item.created_at


@router.get('', response_model=list[KanbanItem])
def list_kanban_items(
    status_filter: Annotated[KanbanStatus | None, Query(alias='status')] = None,
    storage: Storage = Depends(get_storage),
):
    items = storage.get_kanban_items()
    if status_filter is not None:
        items = [item for item in items if item.status == status_filter]
    return sorted(items, key=board_order)


@router.post('', response_model=KanbanItem, status_code=status.HTTP_201_CREATED)
def create_kanban_item(data: KanbanItemCreate, storage: Storage = Depends(get_storage)):
    return storage.create_kanban_item(data)


@router.patch('/{item_id}', response_model=KanbanItem)
def update_kanban_item(item_id: str, data: KanbanItemUpdate, storage: Storage = Depends(get_storage)):
    item = storage.update_kanban_item(item_id, data.model_dump(exclude_unset=True))
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Item not found.',
        )
    return item


@router.delete('/{item_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_kanban_item(item_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_kanban_item(item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Item not found.',
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
