from fastapi import APIRouter, Depends, Query, status

from rolehub.api.deps import get_role_service
from rolehub.schemas.role import Role, RoleCount, RoleCreate, RoleExists, RoleUpdate
from rolehub.services.role import RoleLifecycleService

router = APIRouter(prefix="/roles", tags=["roles"])


@router.post("", response_model=Role, status_code=status.HTTP_201_CREATED)
def create_role(
    role_data: RoleCreate,
    service: RoleLifecycleService = Depends(get_role_service),
):
    """
    Create a new role. The name is trimmed, whitespace-collapsed and upper-cased.
    """
    return Role.model_validate(service.create(role_data.name))


@router.get("", response_model=list[Role])
def get_roles(service: RoleLifecycleService = Depends(get_role_service)):
    return [Role.model_validate(role) for role in service.list_roles()]


@router.get("/search", response_model=list[Role])
def search_roles(
    name: str = Query(..., description="Case-insensitive substring of the role name"),
    service: RoleLifecycleService = Depends(get_role_service),
):
    return [Role.model_validate(role) for role in service.search_by_name(name)]


@router.get("/count", response_model=RoleCount)
def get_role_count(service: RoleLifecycleService = Depends(get_role_service)):
    return RoleCount(count=service.count())


@router.get("/exists", response_model=RoleExists)
def role_exists(
    name: str = Query(...),
    service: RoleLifecycleService = Depends(get_role_service),
):
    return RoleExists(exists=service.exists(name))


@router.get("/by-name/{name}", response_model=Role)
def get_role_by_name(
    name: str,
    service: RoleLifecycleService = Depends(get_role_service),
):
    return Role.model_validate(service.get_by_name(name))


@router.get("/{role_id}", response_model=Role)
def get_role_by_id(
    role_id: int,
    service: RoleLifecycleService = Depends(get_role_service),
):
    return Role.model_validate(service.get_by_id(role_id))


@router.put("/{role_id}", response_model=Role)
def update_role_by_id(
    role_id: int,
    role_data: RoleUpdate,
    service: RoleLifecycleService = Depends(get_role_service),
):
    """
    Rename a role. System roles (ADMIN, reserved names and prefixes) cannot be updated.
    """
    return Role.model_validate(service.update(role_id, role_data.name))


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_role_by_id(
    role_id: int,
    service: RoleLifecycleService = Depends(get_role_service),
):
    """
    Delete a role by ID. System roles cannot be deleted.
    """
    service.delete(role_id)
