# -*- coding: utf-8 -*-
from setuptools import setup

packages = \
['lisklib',
 'lisklib.devices',
 'lisklib.devices.ledger_lisk']

package_data = \
{'': ['*']}

install_requires = \
['hidapi>=0.14.0',
 'ledgercomm[hid]>=1.1.0',
 'typing-extensions>=4.4,<5.0']

extras_require = \
{'test': ['ecdsa>=0.18,<1']}

entry_points = \
{'console_scripts': ['lisk-ledger = lisklib._cli:main']}

setup_kwargs = {
    'name': 'lisk-ledger',
    'version': '1.0.0',
    'description': 'A library for signing Lisk transactions and messages with a Ledger device',
    'long_description': "# Lisk Ledger Interface\n\nThe Lisk Ledger Interface is a Python library and command line tool for talking to the Lisk app on a Ledger hardware wallet.\nIt streams payloads to the device in checksummed chunks, and retrieves public keys and signatures without ever exposing the private keys.\n\n## Install\n\n```\npip3 install .\n```\n\n## Usage\n\nTo use, first enumerate all devices and find the one that you want to use with\n\n```\nlisk-ledger enumerate\n```\n\nThen issue commands to it like so:\n\n```\nlisk-ledger -d <path> getpubkey --account 0\nlisk-ledger -d <path> signtx --account 0 <hex signing bytes>\nlisk-ledger -d <path> signmessage --account 0 'message'\n```\n\nAll output will be in JSON form and sent to `stdout`.\nThe Speculos emulator can be reached with `-d tcp:127.0.0.1:9999`.\n\nFrom Python:\n\n```python\nfrom lisklib.account import LedgerAccount\nfrom lisklib.devices.ledger_lisk import LedgerTransport, LiskLedger\n\nwith LiskLedger(LedgerTransport('hid')) as client:\n    print(client.get_pub_key(LedgerAccount(0)))\n```\n\n## Tests\n\n```\npip3 install .[test]\ncd test && python3 run_tests.py\n```\n\n## License\n\nThis project is available under the MIT License.\n",
    'author': 'None',
    'author_email': 'None',
    'maintainer': 'None',
    'maintainer_email': 'None',
    'url': 'None',
    'packages': packages,
    'package_data': package_data,
    'install_requires': install_requires,
    'extras_require': extras_require,
    'entry_points': entry_points,
    'python_requires': '>=3.8',
}


setup(**setup_kwargs)
