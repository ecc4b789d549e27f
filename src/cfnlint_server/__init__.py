"""cfn-lint language server: surfaces CloudFormation lint findings as editor diagnostics."""

__version__ = "0.1.0"
