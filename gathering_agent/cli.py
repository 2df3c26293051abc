# gathering_agent/cli.py - Command-line interface
"""
Command-line interface for the fact gathering agent.
"""

import asyncio
import click
import sys

from gathering_agent.errors import ConfigurationError, RegistryError
from gathering_agent.utils.logger import setup_logging
from gathering_agent.utils.config import Config, build_registry_from_config


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load_registry(cfg: Config):
    try:
        return build_registry_from_config(cfg)
    except ConfigurationError as e:
        _fail(str(e))


@click.group()
@click.option('--config', 'config_file', type=click.Path(), help='Configuration file')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']), help='Logging level')
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.pass_context
def cli(ctx, config_file, log_level, log_file):
    """
    Fact gathering agent

    Consumes execution requests and gathers the facts addressed to this agent.
    """
    ctx.ensure_object(dict)

    try:
        cfg = Config(config_file)
    except ConfigurationError as e:
        _fail(str(e))

    setup_logging(
        level=log_level or cfg.get('logging.level', 'INFO'),
        log_file=log_file or cfg.get('logging.file')
    )

    ctx.obj['config'] = cfg


@cli.command()
@click.argument('events', type=click.File('rb'), default='-')
@click.option('--agent-id', help='Identity of this agent (overrides configuration)')
@click.option('--metrics-port', type=int, help='Expose Prometheus metrics on this port')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.pass_context
def consume(ctx, events, agent_id, metrics_port, no_color):
    """
    Consume newline-delimited JSON events from EVENTS (stdin by default).

    Example:
        gathering-agent --config agent.yaml consume events.ndjson
        cat events.ndjson | gathering-agent consume --agent-id agent_1
    """
    from gathering_agent.events.consumer import EventConsumer
    from gathering_agent.events.dispatcher import EventDispatcher
    from gathering_agent.exporters.prometheus import PrometheusExporter
    from gathering_agent.exporters.stdout import StdoutExporter
    from gathering_agent.gatherers.runner import GatheringRunner
    from gathering_agent.utils.helpers import read_events

    cfg = ctx.obj['config']

    # Override config with CLI options
    if agent_id:
        cfg.set('agent.agent_id', agent_id)
    if metrics_port:
        cfg.set('metrics.enabled', True)
        cfg.set('metrics.port', metrics_port)

    registry = _load_registry(cfg)

    try:
        dispatcher = EventDispatcher(cfg.get('agent.agent_id'))
    except ConfigurationError as e:
        _fail(str(e))

    output = StdoutExporter(use_colors=not no_color)
    runner = GatheringRunner(registry, dispatcher.agent_id)

    async def on_request(request):
        output.print_request(request)
        output.print_facts(await runner.run(request))

    dispatcher.register_callback(on_request)

    metrics = None
    if cfg.get('metrics.enabled'):
        metrics = PrometheusExporter(port=cfg.get('metrics.port', 9090))
        metrics.start()

    consumer = EventConsumer(dispatcher, exporter=metrics)
    tally = asyncio.run(consumer.run(read_events(events)))

    output.print_summary(tally)


@cli.command()
@click.pass_context
def gatherers(ctx):
    """
    List the configured gatherers and their versions.
    """
    from gathering_agent.exporters.stdout import StdoutExporter

    registry = _load_registry(ctx.obj['config'])
    StdoutExporter().print_gatherers(registry.list())


@cli.command()
@click.argument('reference')
@click.pass_context
def resolve(ctx, reference):
    """
    Resolve a gatherer reference.

    Example:
        gathering-agent --config agent.yaml resolve corosync@v1
    """
    registry = _load_registry(ctx.obj['config'])

    try:
        gatherer = registry.resolve(reference)
    except RegistryError as e:
        _fail(str(e))

    click.echo(f"{reference} -> {gatherer.name()}")


@cli.command()
@click.option('--agent-id', default='agent_1', help='Agent addressed by the sample event')
@click.option('--execution-id', default='exec1', help='Execution id of the sample event')
@click.option('--group-id', default='group1', help='Group id of the sample event')
def sample(agent_id, execution_id, group_id):
    """
    Print a sample execution requested event.
    """
    from gathering_agent.events.contracts import (
        EXECUTION_REQUESTED_EVENT_TYPE,
        ExecutionRequested,
        encode_event,
    )

    event = ExecutionRequested.model_validate({
        'execution_id': execution_id,
        'group_id': group_id,
        'targets': [
            {
                'agent_id': agent_id,
                'fact_requests': [
                    {'argument': '/', 'check_id': 'check1', 'gatherer': 'disk', 'name': 'size'},
                    {'argument': '/', 'check_id': 'check1', 'gatherer': 'disk', 'name': 'free'},
                ],
            },
            {
                'agent_id': agent_id,
                'fact_requests': [
                    {'argument': '/', 'check_id': 'check2', 'gatherer': 'disk', 'name': 'mount'},
                    {'argument': '', 'check_id': 'check2', 'gatherer': 'cpu', 'name': 'cores'},
                ],
            },
        ],
    })

    click.echo(encode_event(EXECUTION_REQUESTED_EVENT_TYPE, event).decode('utf-8'))


if __name__ == '__main__':
    cli(obj={})
