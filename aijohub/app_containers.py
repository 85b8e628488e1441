from dependency_injector import containers, providers
from aijohub.v1_0.v1_containers import APIContainer

class ApplicationContainer(containers.DeclarativeContainer):
    api_container = providers.Container(
        APIContainer
    )
