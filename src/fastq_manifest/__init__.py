"""Build QIIME 2 FASTQ import manifests from a directory of read files."""
