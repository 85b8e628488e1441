from dependency_injector import containers, providers
from aijohub.core.settings import settings
from aijohub.storage.session_storage import make_kv_store
from aijohub.v1_0.services import (
    ApiClient,
    SessionStore,
    )
from aijohub.v1_0.controllers import (
    AppShell,
    SupplierFormController,
    SupplierListController,
    )

class APIContainer(containers.DeclarativeContainer):
    kv_store = providers.Singleton(
        make_kv_store,
        path = settings.SESSION_FILE
    )
    api_client = providers.Singleton(
        ApiClient,
        base_url = settings.API_BASE_URL,
        timeout = settings.HTTP_TIMEOUT_SEC
    )
    session_store = providers.Singleton(
        SessionStore,
        api_client = api_client,
        store = kv_store,
        token_key = settings.SESSION_TOKEN_KEY,
        user_key = settings.SESSION_USER_KEY
    )

    # per session; token/on_saved supplied by AppShell at mount time
    supplier_list_controller = providers.Factory(
        SupplierListController,
        api_client = api_client
    )
    supplier_form_controller = providers.Factory(
        SupplierFormController,
        api_client = api_client
    )

    app_shell = providers.Singleton(
        AppShell,
        session_store = session_store,
        list_controller_factory = supplier_list_controller.provider,
        form_controller_factory = supplier_form_controller.provider
    )
