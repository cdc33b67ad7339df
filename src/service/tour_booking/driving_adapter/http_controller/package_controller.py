from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.command.register_tour_package_use_case import (
    RegisterTourPackageUseCase,
)
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage
from src.service.tour_booking.driving_adapter.http_controller.schema.package_schema import (
    TourPackageRequest,
    TourPackageResponse,
)


router = APIRouter()


def _to_response(package: TourPackage) -> TourPackageResponse:
    return TourPackageResponse(
        id=package.id,
        agency_id=package.agency_id,
        title=package.title,
        price_per_person=package.price_per_person,
        destination=package.destination,
        couple_price=package.couple_price,
        child_price=package.child_price,
        boarding_points=list(package.boarding_points),
        dropping_points=list(package.dropping_points),
    )


@router.put('/{package_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def register_package(
    package_id: str,
    request: TourPackageRequest,
    use_case: RegisterTourPackageUseCase = Depends(RegisterTourPackageUseCase.depends),
) -> TourPackageResponse:
    package = await use_case.register(
        package=TourPackage(
            id=package_id,
            agency_id=request.agency_id,
            title=request.title,
            price_per_person=request.price_per_person,
            destination=request.destination,
            couple_price=request.couple_price,
            child_price=request.child_price,
            boarding_points=request.boarding_points,
            dropping_points=request.dropping_points,
        )
    )
    return _to_response(package)


@router.get('/{package_id}', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def get_package(
    package_id: str,
    tour_package_repo: ITourPackageRepo = Depends(Provide[Container.tour_package_repo]),
) -> TourPackageResponse:
    package = await tour_package_repo.get_package(package_id=package_id)
    if not package:
        raise NotFoundError(f'Package {package_id} not found')
    return _to_response(package)
