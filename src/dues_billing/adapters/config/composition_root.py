from dependency_injector import containers, providers

container = None


def setup_di_container_from_settings(settings):  # noqa: PLR0915
    """Inicializa el contenedor DI cuando Django ya tiene los settings cargados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("di_container.already_initialized")
        return container

    # ------- IMPORTS DE INFRA Y ADAPTERS -------
    import structlog

    from dues_billing.adapters.listeners.payment_ledger import PaymentLedgerListener

    # Repositorios concretos (Django ORM)
    from dues_billing.adapters.repositories.due_repo_impl import DueRepoImpl
    from dues_billing.adapters.repositories.generation_run_repo_impl import GenerationRunRepoImpl
    from dues_billing.adapters.repositories.member_repo_impl import MemberRepoImpl
    from dues_billing.adapters.repositories.payment_record_repo_impl import PaymentRecordRepoImpl

    # ------- IMPORTS DEL CORE -------
    # Commands
    from dues_billing.core.application.commands.due_commands import (
        CreateDueCommand,
        DeleteDueCommand,
        MarkDuePaidCommand,
        UnmarkDuePaidCommand,
    )
    from dues_billing.core.application.commands.generation_commands import (
        AutoExtendDuesCommand,
        BackfillArrearsCommand,
        GenerateDuesForPeriodCommand,
        GenerateDuesForYearCommand,
    )
    from dues_billing.core.application.commands.reconciliation_commands import ReconcilePaymentsCommand

    # CQRS
    from dues_billing.core.application.cqrs import CommandBus, QueryBus

    # Handlers
    from dues_billing.core.application.handlers.due_handlers import (
        CreateDueHandler,
        DeleteDueHandler,
        DueStatsHandler,
        GetDueHandler,
        ListDuesHandler,
        MarkDuePaidHandler,
        UnmarkDuePaidHandler,
    )
    from dues_billing.core.application.handlers.generation_handlers import (
        AutoExtendDuesHandler,
        BackfillArrearsHandler,
        GenerateDuesForPeriodHandler,
        GenerateDuesForYearHandler,
    )
    from dues_billing.core.application.handlers.member_status_handlers import (
        ListMemberStatusesHandler,
        SummarizeMemberHandler,
    )
    from dues_billing.core.application.handlers.reconciliation_handlers import ReconcilePaymentsHandler

    # Queries
    from dues_billing.core.application.queries.due_queries import DueStatsQuery, GetDueQuery, ListDuesQuery
    from dues_billing.core.application.queries.member_status_queries import (
        ListMemberStatusesQuery,
        SummarizeMemberQuery,
    )

    # Servicios de aplicación
    from dues_billing.core.application.services.import_layout import ImportLayout
    from dues_billing.core.application.services.lifecycle_service import DuesLifecycleService
    from dues_billing.core.application.services.member_status_service import MemberStatusService
    from dues_billing.core.application.services.reconciliation_service import ReconciliationService

    # Eventos y calendario
    from dues_billing.core.domain.events.events import DuePaidEvent, DuePaymentRevertedEvent
    from dues_billing.core.domain.services.calendar import SystemClock
    from dues_billing.core.domain.services.event_dispatcher import EventDispatcher

    # ------- DECLARACIÓN DEL CONTENEDOR -------
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        logger = providers.Singleton(structlog.get_logger)
        clock = providers.Singleton(SystemClock)
        event_dispatcher = providers.Singleton(EventDispatcher)

        # CQRS
        command_bus = providers.Singleton(CommandBus)
        query_bus = providers.Singleton(QueryBus)

        # Implementaciones de repositorios (Ports → Adapters)
        member_repo = providers.Singleton(MemberRepoImpl, default_amount=config.dues.default_amount)
        due_repo = providers.Singleton(DueRepoImpl)
        payment_record_repo = providers.Singleton(PaymentRecordRepoImpl)
        generation_run_repo = providers.Singleton(GenerationRunRepoImpl)

        # Listeners
        payment_ledger = providers.Singleton(PaymentLedgerListener, repo=payment_record_repo)

        # Servicios de negocio
        lifecycle_service = providers.Singleton(
            DuesLifecycleService,
            due_repo=due_repo,
            member_repo=member_repo,
            generation_repo=generation_run_repo,
            dispatcher=event_dispatcher,
            clock=clock,
            default_amount=config.dues.default_amount,
        )
        import_layout = providers.Singleton(
            ImportLayout,
            id_columns=config.dues.import_id_columns,
            next_payment_columns=config.dues.import_next_payment_columns,
            paid_tokens=config.dues.import_paid_tokens,
        )
        reconciliation_service = providers.Singleton(
            ReconciliationService,
            lifecycle=lifecycle_service,
            due_repo=due_repo,
            member_repo=member_repo,
            layout=import_layout,
            clock=clock,
            max_lookahead_months=config.dues.import_max_lookahead_months,
        )
        member_status_service = providers.Singleton(
            MemberStatusService,
            member_repo=member_repo,
            due_repo=due_repo,
            clock=clock,
        )

        # Handlers de comandos
        create_due_handler = providers.Factory(CreateDueHandler, lifecycle=lifecycle_service)
        mark_due_paid_handler = providers.Factory(MarkDuePaidHandler, lifecycle=lifecycle_service)
        unmark_due_paid_handler = providers.Factory(UnmarkDuePaidHandler, lifecycle=lifecycle_service)
        delete_due_handler = providers.Factory(DeleteDueHandler, lifecycle=lifecycle_service)
        generate_period_handler = providers.Factory(GenerateDuesForPeriodHandler, lifecycle=lifecycle_service)
        generate_year_handler = providers.Factory(GenerateDuesForYearHandler, lifecycle=lifecycle_service)
        auto_extend_handler = providers.Factory(AutoExtendDuesHandler, lifecycle=lifecycle_service)
        backfill_handler = providers.Factory(BackfillArrearsHandler, lifecycle=lifecycle_service)
        reconcile_handler = providers.Factory(ReconcilePaymentsHandler, service=reconciliation_service)

        # Handlers de queries
        get_due_handler = providers.Factory(GetDueHandler, repo=due_repo)
        list_dues_handler = providers.Factory(ListDuesHandler, repo=due_repo, clock=clock)
        due_stats_handler = providers.Factory(DueStatsHandler, repo=due_repo, clock=clock)
        summarize_member_handler = providers.Factory(SummarizeMemberHandler, service=member_status_service)
        list_member_statuses_handler = providers.Factory(ListMemberStatusesHandler, service=member_status_service)

        def init(self):
            # Libro de pagos
            dispatcher = self.event_dispatcher()
            ledger = self.payment_ledger()
            dispatcher.subscribe(DuePaidEvent, ledger.on_paid, propagate=True)
            dispatcher.subscribe(DuePaymentRevertedEvent, ledger.on_reverted, propagate=True)

            # Registrar comandos en el CommandBus
            bus = self.command_bus()
            bus.register(CreateDueCommand, self.create_due_handler())
            bus.register(MarkDuePaidCommand, self.mark_due_paid_handler())
            bus.register(UnmarkDuePaidCommand, self.unmark_due_paid_handler())
            bus.register(DeleteDueCommand, self.delete_due_handler())
            bus.register(GenerateDuesForPeriodCommand, self.generate_period_handler())
            bus.register(GenerateDuesForYearCommand, self.generate_year_handler())
            bus.register(AutoExtendDuesCommand, self.auto_extend_handler())
            bus.register(BackfillArrearsCommand, self.backfill_handler())
            bus.register(ReconcilePaymentsCommand, self.reconcile_handler())

            # Registrar queries en el QueryBus
            qb = self.query_bus()
            qb.register(GetDueQuery, self.get_due_handler())
            qb.register(ListDuesQuery, self.list_dues_handler())
            qb.register(DueStatsQuery, self.due_stats_handler())
            qb.register(SummarizeMemberQuery, self.summarize_member_handler())
            qb.register(ListMemberStatusesQuery, self.list_member_statuses_handler())

    # ------- INSTANCIACIÓN Y CONFIG -------
    container = Container()
    container.config.dues.default_amount.from_value(settings.DUES_DEFAULT_AMOUNT)
    container.config.dues.import_id_columns.from_value(settings.DUES_IMPORT_ID_COLUMNS)
    container.config.dues.import_next_payment_columns.from_value(settings.DUES_IMPORT_NEXT_PAYMENT_COLUMNS)
    container.config.dues.import_paid_tokens.from_value(settings.DUES_IMPORT_PAID_TOKENS)
    container.config.dues.import_max_lookahead_months.from_value(settings.DUES_IMPORT_MAX_LOOKAHEAD_MONTHS)

    # Registra handlers y listeners
    Container.init(container)
    return container
