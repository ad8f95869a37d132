from setuptools import setup

setup(name='HPECOM-Settings',
      version='0.1.0',
      description='A python client for HPE Compute Ops Management server settings (BIOS, firmware, OS, storage, iLO).',
      author='HPECOM-Settings contributors',
      license='BSD License',
      classifiers=[
          'Development Status :: 4 - Beta',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3',
          'Topic :: Software Development :: Libraries :: Python Modules',
          'Topic :: System :: Systems Administration',
          'Topic :: Communications'
      ],
      keywords='HPE COM Compute Ops Management Redfish BIOS iLO settings',
      packages=['hpecom_settings'],
      scripts=['scripts/hpecomSettingsMain'],
      python_requires='>=3.6',
      install_requires=[
          'requests',                # COM api transport
          'Flask',                   # used by the COM api simulator
          'pytz'                     # token expiry and simulator timestamps
      ],
      extras_require={
          'test': [
              'pytest',
          ],
      },
)
