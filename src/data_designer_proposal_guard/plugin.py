from data_designer.plugins.plugin import Plugin, PluginType

proposal_score_plugin = Plugin(
    config_qualified_name="data_designer_proposal_guard.config.ProposalScoreColumnConfig",
    impl_qualified_name="data_designer_proposal_guard.generator.ProposalScoreColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
